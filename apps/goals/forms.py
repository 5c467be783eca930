from django import forms
from .models import Goal


class GoalForm(forms.ModelForm):
    total_tasks = forms.IntegerField(min_value=0, max_value=10, required=False)

    class Meta:
        model = Goal
        fields = ['title', 'description', 'target_date', 'total_tasks']


class GoalUpdateForm(forms.ModelForm):
    """Częściowa edycja (PATCH): walidujemy tylko przesłane pola."""

    class Meta:
        model = Goal
        fields = ['title', 'description', 'target_date', 'vision_statement']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Pola nieobecne w danych nie są wymagane i nie nadpisują instancji
        for name in list(self.fields):
            if name not in self.data:
                del self.fields[name]
