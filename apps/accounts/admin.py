# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import Role, User


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ['name', 'created_at']
    search_fields = ['name']


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for back office and loyalty users.

    Role assignment lives here; the analytics dashboard counts users
    holding the customer role.
    """

    list_display = [
        'email',
        'display_name',
        'role_names',
        'is_active',
        'is_staff',
        'created_at',
    ]

    list_filter = [
        'is_active',
        'is_staff',
        'roles',
        'created_at',
    ]

    search_fields = [
        'email',
        'display_name',
    ]

    ordering = ['-created_at']
    filter_horizontal = ('roles', 'groups', 'user_permissions')

    # Remove username field references from BaseUserAdmin
    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'display_name', 'password')
        }),
        ('Roles', {
            'fields': ('roles',),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'password1', 'password2', 'roles'),
        }),
    )

    readonly_fields = ['created_at', 'last_login']

    def get_queryset(self, request):
        return super().get_queryset(request).prefetch_related('roles')

    @admin.display(description='Roles')
    def role_names(self, obj):
        return ', '.join(role.name for role in obj.roles.all()) or '-'
