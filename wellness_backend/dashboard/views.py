"""
Admin dashboard API.
"""
from rest_framework.response import Response
from rest_framework.views import APIView

from wellness_backend.core.permissions import IsClinicAdmin

from .kpis import get_dashboard_stats


class DashboardStatsView(APIView):
    """GET /api/admin/dashboard/stats/"""

    permission_classes = [IsClinicAdmin]

    def get(self, request, *args, **kwargs):
        stats = get_dashboard_stats()
        stats['weekly_revenue'] = float(stats['weekly_revenue'])
        return Response(stats)
