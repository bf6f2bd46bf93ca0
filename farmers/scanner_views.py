"""
QR scanner lookup.
"""
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsRegistryAdmin

from .services.scanner import REGISTRANT_TYPES, ScannerService


class ScannerLookupView(APIView):
    """
    GET /api/scanner/lookup/?id=<scanned text>&type=farmer|organic_farmer

    Only REGISTERED records are found. Anything else, including a
    non-numeric scan, answers 404 with ``found: false``.
    """
    permission_classes = [IsRegistryAdmin]

    def get(self, request):
        registrant_type = request.query_params.get('type', 'farmer')
        if registrant_type not in REGISTRANT_TYPES:
            return Response(
                {'error': f"type must be one of: {', '.join(REGISTRANT_TYPES)}"},
                status=status.HTTP_400_BAD_REQUEST
            )

        result = ScannerService.lookup(request.query_params.get('id', ''), registrant_type)
        if result is None:
            return Response(
                {'found': False, 'message': 'No registered farmer matches this code'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response({'found': True, 'farmer': result})
