"""
Dashboard request serializers
"""
from rest_framework import serializers

from farmers.models import ApplicantStatus

from .services.reports import FARMER_TYPES, REPORT_TYPES


class ReportRequestSerializer(serializers.Serializer):
    """Query parameters shared by the report and export endpoints."""
    report_type = serializers.ChoiceField(choices=REPORT_TYPES, default='overview')
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    status = serializers.ChoiceField(
        choices=['ALL'] + list(ApplicantStatus.values),
        required=False,
        default='ALL'
    )
    search = serializers.CharField(required=False, allow_blank=True, default='')
    farmer_type = serializers.ChoiceField(choices=FARMER_TYPES, required=False, default='all')

    def validate(self, data):
        start_date = data.get('start_date')
        end_date = data.get('end_date')
        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError("start_date must be before end_date")
        return data
