"""
Contains DRF serializer classes for presenting holdings and pickup
locations.
"""
from rest_framework import serializers

from utils.camel_case.render import CamelCaseJSONRenderer


class HoldingEntrySerializer(serializers.Serializer):
    id = serializers.CharField(allow_null=True)
    item_id = serializers.CharField()
    holding_group_id = serializers.CharField(allow_null=True)
    available = serializers.BooleanField()
    status = serializers.CharField(allow_blank=True)
    location_label = serializers.CharField(allow_blank=True)
    location_code = serializers.CharField(allow_null=True)
    branch_code = serializers.CharField(allow_null=True)
    call_number = serializers.CharField(allow_blank=True)
    due_date = serializers.SerializerMethodField()
    requests_placed = serializers.IntegerField(allow_null=True)
    sort_key = serializers.IntegerField()
    enumeration = serializers.CharField(allow_blank=True)
    barcode = serializers.CharField(allow_blank=True)
    use_unknown_message = serializers.BooleanField(source='is_placeholder')
    extra = serializers.DictField()

    def get_due_date(self, obj):
        return obj.due_date.isoformat() if obj.due_date else None


class SummaryEntrySerializer(serializers.Serializer):
    available = serializers.IntegerField()
    total = serializers.IntegerField()
    locations = serializers.IntegerField()
    reservations = serializers.IntegerField(allow_null=True)
    location_label = serializers.CharField()

    def to_representation(self, instance):
        ret = super(SummaryEntrySerializer, self).to_representation(instance)
        if ret['reservations'] is None:
            del ret['reservations']
        return ret


class PickupLocationSerializer(serializers.Serializer):
    location_id = serializers.CharField()
    label = serializers.CharField()
    is_address = serializers.BooleanField()


def serialize_holdings(entries):
    """
    Serialize a ranked list of holdings entries, including the
    trailing summary entry, into a list of dicts.
    """
    return [SummaryEntrySerializer(e).data if e.is_summary
            else HoldingEntrySerializer(e).data for e in entries]


def serialize_pickup_locations(locations):
    return PickupLocationSerializer(locations, many=True).data


def render_json(data):
    """
    Render serialized data as JSON bytes, with camelCase field names.
    """
    return CamelCaseJSONRenderer().render(data)
