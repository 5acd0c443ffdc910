# accounts/tests.py
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase, Client, RequestFactory
from django.urls import reverse

from jobs.models import Job, Application
from .session import SessionContext, get_session_context

User = get_user_model()


class SessionContextTests(TestCase):
    def test_anonymous(self):
        ctx = SessionContext.from_user(AnonymousUser())
        self.assertFalse(ctx.is_authenticated)
        self.assertFalse(ctx.is_employer)
        self.assertFalse(ctx.is_job_seeker)
        self.assertEqual(ctx, SessionContext.anonymous())

    def test_from_user(self):
        user = User.objects.create_user(username="acme", password="pass", role="employer",
                                        first_name="Ann", last_name="Lee", email="ann@acme.test")
        ctx = SessionContext.from_user(user)
        self.assertTrue(ctx.is_authenticated)
        self.assertTrue(ctx.is_employer)
        self.assertEqual(ctx.user_id, user.pk)
        self.assertEqual(ctx.display_name, "Ann Lee")
        self.assertEqual(ctx.email, "ann@acme.test")
        self.assertFalse(ctx.loading)

    def test_built_once_per_request(self):
        request = RequestFactory().get("/")
        request.user = User.objects.create_user(username="jane", password="pass")
        first = get_session_context(request)
        self.assertIs(get_session_context(request), first)
        self.assertTrue(first.is_job_seeker)

    def test_template_sees_session(self):
        user = User.objects.create_user(username="jane", password="pass", first_name="Jane")
        client = Client()
        client.force_login(user)
        response = client.get(reverse("home"))
        self.assertEqual(response.context["session"].user_id, user.pk)


class SignupTests(TestCase):
    def signup(self, role):
        return self.client.post(reverse("signup"), {
            "username": "newuser",
            "email": "new@example.com",
            "first_name": "New",
            "last_name": "User",
            "role": role,
            "password1": "Sup3r-s3cret-pw!",
            "password2": "Sup3r-s3cret-pw!",
        })

    def test_signup_as_employer_logs_in(self):
        response = self.signup("employer")
        self.assertRedirects(response, reverse("dashboard"))
        user = User.objects.get(username="newuser")
        self.assertTrue(user.is_employer())
        self.assertEqual(int(self.client.session["_auth_user_id"]), user.pk)

    def test_signup_as_job_seeker(self):
        self.signup("job_seeker")
        self.assertTrue(User.objects.get(username="newuser").is_job_seeker())

    def test_signup_requires_role(self):
        response = self.signup("")
        self.assertEqual(response.status_code, 200)
        self.assertIn("role", response.context["form"].errors)
        self.assertFalse(User.objects.filter(username="newuser").exists())


class DashboardTests(TestCase):
    def setUp(self):
        self.employer = User.objects.create_user(username="acme", password="pass", role="employer")
        self.seeker = User.objects.create_user(username="jane", password="pass")
        self.client = Client()

    def test_requires_login(self):
        response = self.client.get(reverse("dashboard"))
        self.assertEqual(response.status_code, 302)
        self.assertIn(reverse("login"), response["Location"])

    def test_employer_dashboard(self):
        self.client.force_login(self.employer)
        response = self.client.get(reverse("dashboard"))
        self.assertTemplateUsed(response, "accounts/employer_dashboard.html")
        self.assertEqual(response.context["selected_tab"].status, "active")
        self.assertContains(response, "No active jobs found")

    def test_unknown_tab_falls_back_to_active(self):
        self.client.force_login(self.employer)
        response = self.client.get(reverse("dashboard"), {"tab": "archived"})
        self.assertEqual(response.context["selected_tab"].status, "active")

    def test_job_seeker_dashboard(self):
        job = Job.objects.create(employer=self.employer, title="Data Scientist", company="AnalyticsPro",
                                 location="Boston, MA", description="Models")
        Application.objects.create(job=job, applicant=self.seeker, applicant_name="jane",
                                   applicant_email="jane@example.com", status="accepted")
        self.client.force_login(self.seeker)
        response = self.client.get(reverse("dashboard"))
        self.assertTemplateUsed(response, "accounts/job_seeker_dashboard.html")
        self.assertEqual(response.context["total"], 1)
        self.assertEqual(response.context["offers"], 1)
        self.assertEqual(response.context["pending"], 0)
        self.assertContains(response, "Data Scientist")

    def test_job_seeker_dashboard_empty(self):
        self.client.force_login(self.seeker)
        response = self.client.get(reverse("dashboard"))
        self.assertTrue(response.context["applications"].is_empty)


class SettingsTests(TestCase):
    def setUp(self):
        self.client = Client()

    def test_update_profile(self):
        user = User.objects.create_user(username="jane", password="pass")
        self.client.force_login(user)
        response = self.client.post(reverse("settings"), {
            "first_name": "Jane",
            "headline": "Engineer",
            "skills_csv": "Python, Django, ",
            "application_updates": "on",
        })
        self.assertRedirects(response, reverse("settings"))
        user.refresh_from_db()
        self.assertEqual(user.headline, "Engineer")
        self.assertEqual(user.skills, ["Python", "Django"])
        self.assertTrue(user.application_updates)
        self.assertFalse(user.job_alerts)
        self.assertEqual(user.role, "job_seeker")

    def test_company_form_only_for_employers(self):
        seeker = User.objects.create_user(username="jane", password="pass")
        self.client.force_login(seeker)
        self.assertIsNone(self.client.get(reverse("settings")).context["company_form"])

        employer = User.objects.create_user(username="acme", password="pass", role="employer")
        self.client.force_login(employer)
        response = self.client.post(reverse("settings"), {"company_name": "Acme Inc", "industry": "Software"})
        self.assertRedirects(response, reverse("settings"))
        employer.refresh_from_db()
        self.assertEqual(employer.company_name, "Acme Inc")
        self.assertEqual(employer.industry, "Software")

    def test_rejects_non_image_avatar(self):
        from django.core.files.uploadedfile import SimpleUploadedFile
        user = User.objects.create_user(username="jane", password="pass")
        self.client.force_login(user)
        avatar = SimpleUploadedFile("me.txt", b"hello", content_type="text/plain")
        response = self.client.post(reverse("settings"), {"avatar": avatar})
        self.assertEqual(response.status_code, 200)
        self.assertIn("avatar", response.context["form"].errors)
