# apps/core/views.py

import logging

from django.core.cache import cache
from django.db import DatabaseError, connection
from django.utils import timezone
from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

logger = logging.getLogger(__name__)

CACHE_PROBE_KEY = 'health:probe'


def check_database():
    with connection.cursor() as cursor:
        cursor.execute('SELECT 1')


def check_cache():
    cache.set(CACHE_PROBE_KEY, 'ok', timeout=5)
    return cache.get(CACHE_PROBE_KEY) == 'ok'


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def health_check(request):
    """Database is required; cache failures only degrade the status"""
    checks = {}
    try:
        check_database()
        checks['database'] = 'ok'
    except DatabaseError as e:
        logger.error('Health check: database unavailable: %s', e)
        return Response({
            'status': 'unhealthy',
            'timestamp': timezone.now().isoformat(),
            'checks': {'database': 'error'},
            'error': str(e),
        }, status=status.HTTP_503_SERVICE_UNAVAILABLE)

    try:
        checks['cache'] = 'ok' if check_cache() else 'error'
    except Exception as e:
        logger.warning('Health check: cache unavailable: %s', e)
        checks['cache'] = 'error'

    return Response({
        'status': 'healthy' if checks['cache'] == 'ok' else 'degraded',
        'timestamp': timezone.now().isoformat(),
        'checks': checks,
    })
