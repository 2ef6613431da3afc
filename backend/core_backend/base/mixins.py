from rest_framework.viewsets import ViewSetMixin


class OptimizedQuerysetMixin(ViewSetMixin):
    """
    A ViewSet mixin that automatically optimizes the queryset by inspecting
    the associated serializer for `select_related_fields` and
    `prefetch_related_fields` attributes in its Meta class.
    """

    def get_queryset(self):
        queryset = super().get_queryset()

        try:
            serializer_class = self.get_serializer_class()
        except (AttributeError, AssertionError):
            return queryset

        meta = getattr(serializer_class, "Meta", None)
        if meta is None:
            return queryset

        select_related = getattr(meta, "select_related_fields", [])
        if select_related:
            queryset = queryset.select_related(*select_related)

        prefetch_related = getattr(meta, "prefetch_related_fields", [])
        if prefetch_related:
            queryset = queryset.prefetch_related(*prefetch_related)

        return queryset


class FieldsetQueryParamsMixin:
    """
    Passes ?view= and ?fields= through the serializer context so that
    serializers using FieldsetMixin can trim their output.

    When ?view= is absent, list actions use the 'list' fieldset and
    everything else uses 'detail'.
    """

    def get_serializer_context(self):
        context = super().get_serializer_context()
        request = context.get("request")
        if request is None:
            return context

        view_mode = request.query_params.get("view")
        if not view_mode:
            view_mode = "list" if getattr(self, "action", None) == "list" else "detail"
        context["view_mode"] = view_mode

        fields = request.query_params.get("fields")
        if fields:
            context["requested_fields"] = {f.strip() for f in fields.split(",") if f.strip()}

        return context
