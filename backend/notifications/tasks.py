from celery import shared_task

from .dispatcher import build_dispatcher

# No autoretry here: a second run would create a second Notification row.
# Failed sends are picked up by retry_failed_notifications instead.


@shared_task(ignore_result=True)
def send_tracking_activated(order_id: str):
    build_dispatcher().dispatch_tracking_activated(order_id)


@shared_task(ignore_result=True)
def send_status_update(order_id: str, new_status: str, note=None):
    build_dispatcher().dispatch_status_update(order_id, new_status, note)


@shared_task
def retry_failed_notifications() -> dict:
    summary = build_dispatcher().retry_failed()
    return {"total": summary.total, "success": summary.success, "failed": summary.failed}
