from rest_framework import serializers


class BaseModelSerializer(serializers.ModelSerializer):
    """
    Base serializer that provides common functionality.

    Subclasses may declare `select_related_fields` / `prefetch_related_fields`
    on their Meta; OptimizedQuerysetMixin applies them to the view queryset.
    """

    class Meta:
        select_related_fields = []
        prefetch_related_fields = []


class FieldsetMixin:
    """
    Mixin that enables dynamic field control via context:
    - Fieldsets (view modes: list, detail, reference)
    - Dynamic field filtering (?fields=id,name)

    Usage:
        class TableSerializer(FieldsetMixin, BaseModelSerializer):
            class Meta:
                model = DiningTable
                fields = '__all__'
                fieldsets = {
                    'list': ['id', 'table_number', 'status'],
                    'detail': '__all__',
                }
                required_fields = {'id'}  # Default
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._apply_fieldset_filtering()
        self._apply_dynamic_field_filtering()

    def _restrict_to(self, names):
        required_fields = getattr(self.Meta, 'required_fields', {'id'})
        allowed = set(names) | required_fields
        for field_name in set(self.fields.keys()) - allowed:
            self.fields.pop(field_name)

    def _apply_fieldset_filtering(self):
        view_mode = self.context.get('view_mode')
        fieldsets = getattr(self.Meta, 'fieldsets', {})

        if view_mode and view_mode in fieldsets:
            fieldset_value = fieldsets[view_mode]
            if fieldset_value == '__all__':
                return
            self._restrict_to(fieldset_value)

    def _apply_dynamic_field_filtering(self):
        requested = self.context.get('requested_fields')
        if requested:
            self._restrict_to(requested)
