from django.contrib import admin

from webinars.models import Admission, Attendee, Webinar


class AdmissionInline(admin.TabularInline):
    model = Admission
    extra = 0
    can_delete = False
    readonly_fields = ["id", "attendee", "created_at"]

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Webinar)
class WebinarAdmin(admin.ModelAdmin):
    list_display = ["title", "owner_id", "capacity", "starts_at", "ends_at"]
    search_fields = ["title", "owner_id"]
    inlines = [AdmissionInline]


@admin.register(Attendee)
class AttendeeAdmin(admin.ModelAdmin):
    list_display = ["email", "created_at"]
    search_fields = ["email"]
    exclude = ["credential"]


@admin.register(Admission)
class AdmissionAdmin(admin.ModelAdmin):
    list_display = ["webinar", "attendee", "created_at"]
    list_filter = ["webinar"]
    readonly_fields = ["id", "webinar", "attendee", "created_at"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
