from datetime import datetime
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.permissions import is_manager, scope_clients
from app.models.activity_log import ActivityLog
from app.models.client import Client, ClientStatus
from app.models.user import User


def get_dashboard(db: Session, user: User) -> dict:
    """
    Метрики дашборда по видимым пользователю клиентам.

    Агент видит своих клиентов и свои действия, менеджер - всех.
    """
    base = scope_clients(db.query(Client), user)

    # Количество клиентов по статусам
    by_status = dict(
        scope_clients(db.query(Client.status, func.count(Client.client_id)), user)
        .group_by(Client.status)
        .all()
    )
    total = sum(by_status.values())
    closed = by_status.get(ClientStatus.CLOSED.value, 0)

    pending_follow_ups = base.filter(
        Client.next_follow_up_date.isnot(None),
        Client.next_follow_up_date <= datetime.utcnow(),
        Client.status != ClientStatus.CLOSED.value,
    ).count()

    activity_query = db.query(ActivityLog)
    if not is_manager(user):
        activity_query = activity_query.filter(ActivityLog.user_id == user.user_id)
    activities = activity_query.order_by(ActivityLog.timestamp.desc()).limit(
        settings.DASHBOARD_ACTIVITY_LIMIT
    ).all()

    return {
        "dashboard_metrics": {
            "total_active_clients": total - closed,
            "new_leads": by_status.get(ClientStatus.NEW.value, 0),
            "in_progress": by_status.get(ClientStatus.IN_PROGRESS.value, 0),
            "closed": closed,
            "pending_follow_ups": pending_follow_ups,
        },
        "recent_activity": [
            {
                "activity_id": a.activity_id,
                "description": _describe(a),
                "timestamp": a.timestamp,
            }
            for a in activities
        ],
    }


def _describe(activity: ActivityLog) -> str:
    if activity.action_details:
        return f"{activity.action_type}: {activity.action_details}"
    return activity.action_type
