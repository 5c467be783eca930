import django_filters
from .models import Task


class TaskFilter(django_filters.FilterSet):
    title = django_filters.CharFilter(lookup_expr='icontains', label="Tytuł zawiera")
    completed = django_filters.BooleanFilter(label="Ukończone")
    goal = django_filters.NumberFilter(field_name='goal_id', label="Cel")
    is_subtask = django_filters.BooleanFilter(label="Podzadanie")
    planned_after = django_filters.DateFilter(
        field_name='planned_date',
        lookup_expr='gte',
        label="Zaplanowane od"
    )
    planned_before = django_filters.DateFilter(
        field_name='planned_date',
        lookup_expr='lte',
        label="Zaplanowane do"
    )

    class Meta:
        model = Task
        fields = ['is_ai_generated']
