from rest_framework import serializers


class TaskInputSerializer(serializers.Serializer):
    """Payload for POST /api/tasks."""

    id = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    title = serializers.CharField()
    project = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)
    priority = serializers.IntegerField(required=False, allow_null=True)
    due = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)
    done = serializers.BooleanField(required=False, allow_null=True)
    createdAt = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class TaskUpdateSerializer(TaskInputSerializer):
    """Payload for PUT /api/tasks/{id}.

    Every field is optional here; the repository decides which absent fields
    keep their value and which fall back to a default.
    """

    title = serializers.CharField(required=False, allow_null=True)

    def validate(self, attrs):
        # id and createdAt are assigned by the server and never change
        attrs.pop("id", None)
        attrs.pop("createdAt", None)
        return attrs
