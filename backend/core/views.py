from django.db import connection
from django.utils import timezone

from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response


@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def ping(request):
    """
    GET /ping/        -> liveness
    GET /ping/?db=1   -> also checks the database
    """
    out = {"ok": True, "time": timezone.now().isoformat()}
    if request.query_params.get("db") == "1":
        try:
            with connection.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
            out["db"] = {"ok": True}
        except Exception as e:
            out["ok"] = False
            out["db"] = {"ok": False, "error": str(e)}
    return Response(out, status=200 if out["ok"] else 503)
