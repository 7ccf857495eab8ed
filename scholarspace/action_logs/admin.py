from django.contrib import admin
from scholarspace.action_logs.models.action_log import ActionLog


@admin.register(ActionLog)
class ActionLogAdmin(admin.ModelAdmin):
    list_display = ("timestamp", "user", "category", "action")
    list_filter = ("category",)
    search_fields = ("action", "user__username")
    readonly_fields = [f.name for f in ActionLog._meta.fields]
