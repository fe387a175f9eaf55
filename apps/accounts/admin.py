from django.contrib import admin
from .models import User, AdminActivityLog


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    ordering = ['-date_joined']
    list_display = ['email', 'name', 'role', 'is_blocked', 'is_active', 'date_joined']
    list_filter = ['role', 'is_blocked', 'is_active', 'is_staff']
    search_fields = ['email', 'name', 'phone']
    filter_horizontal = ('wishlist',)
    readonly_fields = ['last_login', 'date_joined']

    # Passwords are managed through the API (hashed), never edited here
    fieldsets = (
        (None, {'fields': ('email',)}),
        ('Personal info', {'fields': ('name', 'phone', 'profile_picture_url', 'role')}),
        ('Status', {'fields': ('is_active', 'is_blocked', 'is_staff', 'is_superuser')}),
        ('Wishlist', {'fields': ('wishlist',), 'classes': ('collapse',)}),
        ('Important dates', {'fields': ('last_login', 'date_joined')}),
    )


@admin.register(AdminActivityLog)
class AdminActivityLogAdmin(admin.ModelAdmin):
    list_display = ['admin_user_name', 'action', 'ip_address', 'created_at']
    list_filter = ['created_at']
    search_fields = ['admin_user_name', 'action', 'details']
    readonly_fields = ['admin_user', 'admin_user_name', 'action', 'details', 'ip_address', 'created_at']
