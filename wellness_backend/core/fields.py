"""Serializer fields for multipart-friendly list and object inputs.

Admin forms post multipart data, so list and object values arrive either as
real JSON (JSON requests), as a JSON-encoded string, or as a comma-separated
string.
"""

import json

from rest_framework import serializers


class FlexibleListField(serializers.ListField):
    """List of strings accepting a list, a JSON array string or "a, b, c"."""

    def __init__(self, **kwargs):
        kwargs.setdefault('child', serializers.CharField(allow_blank=False))
        kwargs.setdefault('required', False)
        super().__init__(**kwargs)

    def get_value(self, dictionary):
        # QueryDict.getlist would split repeated keys; a single value is the norm here
        if hasattr(dictionary, 'getlist') and self.field_name in dictionary:
            values = dictionary.getlist(self.field_name)
            if len(values) == 1:
                return values[0]
            return values
        return super().get_value(dictionary)

    def to_internal_value(self, data):
        if isinstance(data, str):
            text = data.strip()
            if not text:
                data = []
            elif text.startswith('['):
                try:
                    data = json.loads(text)
                except ValueError:
                    raise serializers.ValidationError('Invalid JSON list.')
            else:
                data = [part.strip() for part in text.split(',') if part.strip()]
        return super().to_internal_value(data)


class FlexibleJSONField(serializers.JSONField):
    """JSON value that may also arrive as a JSON-encoded string."""

    def to_internal_value(self, data):
        if isinstance(data, str):
            try:
                return json.loads(data) if data.strip() else None
            except ValueError:
                raise serializers.ValidationError('Invalid JSON.')
        return super().to_internal_value(data)
