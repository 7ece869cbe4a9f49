from rest_framework.permissions import BasePermission, SAFE_METHODS

from .access import (
    ADMIN_ROLES, BACK_OFFICE_ROLES, COLLECTIONS_ROLES, has_admin_permission,
)


class _RolePermission(BasePermission):
    roles = ()
    message = 'Access denied. Admin privileges required.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.role in self.roles)


class IsAdminRole(_RolePermission):
    roles = ADMIN_ROLES


class IsSuperAdmin(_RolePermission):
    roles = ('super_admin',)
    message = 'Access denied. Super admin privileges required.'


class IsSuperAdminOrReadOnly(BasePermission):
    """Any caller may read; only a super admin may write"""
    message = IsSuperAdmin.message

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return bool(request.user and request.user.is_authenticated and request.user.role == 'super_admin')


class IsBackOfficeRole(_RolePermission):
    """Admins plus managers, designers and CRMs"""
    roles = BACK_OFFICE_ROLES
    message = 'Access denied. Staff privileges required.'


class IsCollectionsRole(_RolePermission):
    """Roles allowed to work with payments"""
    roles = COLLECTIONS_ROLES
    message = 'Access denied. Only admins, managers and CRMs can manage payments.'


METHOD_ACTIONS = {
    'GET': 'view',
    'HEAD': 'view',
    'OPTIONS': 'view',
    'POST': 'create',
    'PUT': 'edit',
    'PATCH': 'edit',
    'DELETE': 'delete',
}


def HasAdminPermission(resource, allow_read=False):
    """
    Build a permission class checking ``<action>_<resource>`` where the
    action follows the HTTP method (GET -> view, POST -> create, ...).
    With ``allow_read`` any user passing the other permission classes may
    use safe methods.
    """
    class _AdminPermission(BasePermission):
        message = f'Access denied. Missing permission for {resource}.'

        def has_permission(self, request, view):
            if allow_read and request.method in SAFE_METHODS:
                return True
            action = METHOD_ACTIONS.get(request.method, 'view')
            return has_admin_permission(request.user, f'{action}_{resource}')

    _AdminPermission.__name__ = f'HasAdminPermission_{resource}'
    return _AdminPermission
