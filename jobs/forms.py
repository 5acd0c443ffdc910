# jobs/forms.py
from django import forms
from django.conf import settings
from django.core.exceptions import ValidationError
from .models import Job, WORK_MODE_CHOICES, CATEGORY_CHOICES
from django.utils import timezone


class JobForm(forms.ModelForm):
    class Meta:
        model = Job
        fields = [
            'title', 'company', 'location', 'work_mode', 'category',
            'salary_currency', 'salary_min', 'salary_max',
            'deadline', 'description', 'requirements',
        ]
        widgets = {
            'deadline': forms.DateInput(attrs={'type': 'date'}),
            'description': forms.Textarea(attrs={'rows': 6}),
            'requirements': forms.Textarea(attrs={'rows': 4}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['deadline'].required = True

    def clean_deadline(self):
        d = self.cleaned_data.get('deadline')
        if d and d < timezone.localdate():
            raise ValidationError("Deadline cannot be in the past.")
        return d

    def clean(self):
        cleaned = super().clean()
        low = cleaned.get('salary_min')
        high = cleaned.get('salary_max')
        if low is not None and high is not None and low > high:
            self.add_error('salary_max', "Maximum salary must be greater than or equal to the minimum.")
        for name in ('title', 'company', 'location', 'description'):
            value = cleaned.get(name)
            if isinstance(value, str) and not value.strip():
                self.add_error(name, "This field cannot be blank.")
        return cleaned


class SearchForm(forms.Form):
    """Unbound-friendly form for the search bar; filtering itself lives in jobs.filters."""
    q = forms.CharField(required=False)
    location = forms.CharField(required=False)
    type = forms.ChoiceField(required=False, choices=(('', 'All Types'),) + WORK_MODE_CHOICES)
    category = forms.ChoiceField(required=False, choices=(('', 'All Categories'),) + CATEGORY_CHOICES)
    salary_min = forms.IntegerField(required=False, min_value=0)
    salary_max = forms.IntegerField(required=False, min_value=0)


class ApplyForm(forms.Form):
    resume = forms.FileField(required=False)
    cover_letter = forms.CharField(required=False, widget=forms.Textarea(attrs={'rows': 4}), max_length=5000)

    def clean_resume(self):
        f = self.cleaned_data.get('resume')
        if not f:
            return f
        name = f.name.lower()
        if not name.endswith(('.pdf', '.doc', '.docx')):
            raise forms.ValidationError("Only PDF, DOC and DOCX files are allowed.")
        max_mb = getattr(settings, 'JOBBOARD_RESUME_MAX_MB', 5)
        if f.size > max_mb * 1024 * 1024:
            raise forms.ValidationError(f"File size must be <= {max_mb} MB.")
        return f


class StatusForm(forms.Form):
    status = forms.CharField(max_length=10)
    message = forms.CharField(required=False, widget=forms.Textarea(attrs={'rows': 3}), max_length=1000)
