"""
Система разрешений (Permissions) для управления доступом.

Разрешения определяются в конфигурации, группируются по областям
и привязываются к ролям.

Структура разрешений: "area.action" (например, "clients.import")

Видимость записей клиентов задается одним правилом (scope_clients /
can_access_client), которое используют список, карточка, экспорт и дашборд.
"""
from app.models.user import User, UserRole
from app.models.client import Client
from typing import Dict, List, Set

# Конфигурация разрешений: разрешение -> список ролей, которым оно доступно
PERMISSIONS: Dict[str, List[UserRole]] = {
    # ========== Клиенты ==========
    "clients.read": [UserRole.AGENT, UserRole.MANAGER],
    "clients.write": [UserRole.AGENT, UserRole.MANAGER],
    "clients.import": [UserRole.MANAGER],  # Массовый импорт CSV
    "clients.export": [UserRole.AGENT, UserRole.MANAGER],

    # История коммуникаций и вложения
    "communications.read": [UserRole.AGENT, UserRole.MANAGER],
    "communications.write": [UserRole.AGENT, UserRole.MANAGER],
    "attachments.read": [UserRole.AGENT, UserRole.MANAGER],
    "attachments.write": [UserRole.AGENT, UserRole.MANAGER],

    # ========== Администрирование ==========
    "users.read": [UserRole.MANAGER],
    "activity_log.read": [UserRole.MANAGER],
    "activity_log.write": [UserRole.AGENT, UserRole.MANAGER],
}


def _as_role(user_role) -> UserRole | None:
    if isinstance(user_role, UserRole):
        return user_role
    try:
        return UserRole(user_role)
    except ValueError:
        return None


def has_permission(user_role: UserRole, permission: str) -> bool:
    """
    Проверяет, есть ли у роли указанное разрешение.

    Args:
        user_role: Роль пользователя (enum или строка из БД)
        permission: Название разрешения (например, "clients.import")

    Returns:
        True, если у роли есть разрешение, False иначе
    """
    role = _as_role(user_role)
    if role is None:
        return False
    allowed_roles = PERMISSIONS.get(permission, [])
    return role in allowed_roles


def get_user_permissions(user_role: UserRole) -> Set[str]:
    """Возвращает все разрешения для указанной роли."""
    role = _as_role(user_role)
    return {perm for perm, roles in PERMISSIONS.items() if role in roles}


def is_manager(user: User) -> bool:
    return _as_role(user.role) == UserRole.MANAGER


def scope_clients(query, user: User):
    """
    Ограничивает запрос клиентов видимыми для пользователя записями.

    Удаленные (deleted_at задан) не видит никто, агент видит только
    назначенных ему клиентов, менеджер видит всех.
    """
    query = query.filter(Client.deleted_at.is_(None))
    if not is_manager(user):
        query = query.filter(Client.assigned_agent_id == user.user_id)
    return query


def can_access_client(user: User, client: Client) -> bool:
    """То же правило, что и scope_clients, для уже загруженной записи"""
    if client.deleted_at is not None:
        return False
    return is_manager(user) or client.assigned_agent_id == user.user_id


def require_permission(permission: str):
    """
    Зависимость FastAPI для проверки разрешения у текущего пользователя.

    Пример:
        @router.get("/users")
        def get_users(current_user: User = Depends(require_permission("users.read"))):
            ...
    """
    from fastapi import Depends, HTTPException, status
    from app.core.dependencies import get_current_active_user

    def permission_checker(current_user: User = Depends(get_current_active_user)) -> User:
        if not has_permission(current_user.role, permission):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Not enough permissions. Required: {permission}"
            )
        return current_user

    return permission_checker
