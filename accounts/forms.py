# accounts/forms.py
from django import forms
from django.contrib.auth.forms import UserCreationForm
from .models import User


class UserSignupForm(UserCreationForm):
    role = forms.ChoiceField(choices=User.ROLE_CHOICES, widget=forms.RadioSelect)

    class Meta:
        model = User
        fields = ('username', 'email', 'first_name', 'last_name', 'role', 'password1', 'password2')

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['email'].required = True


class ProfileForm(forms.ModelForm):
    # comma separated in the form, stored as a list
    skills_csv = forms.CharField(required=False, help_text="Comma separated skills (e.g. Python,SQL,Django)")

    class Meta:
        model = User
        fields = [
            'first_name', 'last_name', 'headline', 'location', 'bio',
            'website_url', 'linkedin_url', 'github_url', 'avatar',
            'job_alerts', 'application_updates', 'marketing_emails',
        ]

    def __init__(self, *args, **kwargs):
        instance = kwargs.get('instance')
        if instance and instance.skills:
            initial = kwargs.get('initial', {})
            initial['skills_csv'] = ', '.join(instance.skills)
            kwargs['initial'] = initial
        super().__init__(*args, **kwargs)

    def clean_avatar(self):
        f = self.cleaned_data.get('avatar')
        if not f or not hasattr(f, 'content_type'):
            return f
        name = f.name.lower()
        if not name.endswith(('.png', '.jpg', '.jpeg', '.gif', '.webp')):
            raise forms.ValidationError("Avatar must be an image file.")
        if f.size > 2 * 1024 * 1024:
            raise forms.ValidationError("Avatar must be <= 2 MB.")
        return f

    def save(self, commit=True):
        user = super().save(commit=False)
        skills_csv = self.cleaned_data.get('skills_csv', '')
        user.skills = [s.strip() for s in skills_csv.split(',') if s.strip()]
        if commit:
            user.save()
        return user


class CompanyProfileForm(forms.ModelForm):
    class Meta:
        model = User
        fields = ['company_name', 'industry', 'company_size', 'company_description', 'company_website']
