from django.db import DatabaseError, connection
from django.http import JsonResponse


def health_check(request):
    """Liveness check with a trivial database round-trip."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
        database = 'ok'
    except DatabaseError:
        database = 'unavailable'

    status = 200 if database == 'ok' else 503
    return JsonResponse({'status': 'ok' if status == 200 else 'degraded', 'database': database}, status=status)


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'error': 'Not found',
        'status': 404
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'error': 'Internal server error',
        'status': 500
    }, status=500)
