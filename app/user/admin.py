from django.contrib import admin
from django.contrib.auth import get_user_model


class UserAdmin(admin.ModelAdmin):
    list_display = ("id", "username", "email", "is_staff", "date_joined")
    list_filter = ("is_staff", "date_joined")
    search_fields = ("username", "email")
    ordering = ("-date_joined",)


admin.site.register(get_user_model(), UserAdmin)
