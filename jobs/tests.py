# jobs/tests.py
import datetime
import json
import os
import shutil
import tempfile
from io import StringIO
from unittest import mock

from django.contrib.auth import get_user_model
from django.contrib.messages import get_messages
from django.core import mail
from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management import call_command
from django.db import DatabaseError, IntegrityError
from django.test import SimpleTestCase, TestCase, Client, override_settings
from django.urls import reverse
from django.utils import timezone

from .exceptions import CollaboratorError, CriteriaError, EntityNotFound, IllegalTransition
from .filters import FilterCriteria, filter_listings
from .forms import JobForm
from .models import Job, Application
from .mutations import (
    APPLICATION_TRANSITIONS,
    LISTING_TRANSITIONS,
    StatusMutator,
    allowed_statuses,
    validate_transition,
)
from .partitions import (
    APPLICATION_TABS,
    EMPTY,
    LISTING_TABS,
    LOADING,
    POPULATED,
    compose_tabs,
    compose_view,
    partition,
    status_counts,
)

User = get_user_model()

FRONTEND = {"id": 1, "title": "Senior Frontend Developer", "company": "TechCorp", "location": "Remote",
            "work_mode": "remote", "category": "Technology", "salary_min": 95000, "salary_max": 125000,
            "status": "active"}
DEVOPS = {"id": 2, "title": "DevOps Engineer", "company": "CloudTech", "location": "San Francisco, CA",
          "work_mode": "onsite", "category": "Engineering", "salary_min": 120000, "salary_max": 160000,
          "status": "active"}
DESIGNER = {"id": 3, "title": "UI/UX Designer", "company": "DesignStudio", "location": "Remote",
            "work_mode": "remote", "category": "Design", "salary_min": 85000, "salary_max": 110000,
            "status": "active"}
PM = {"id": 4, "title": "Product Manager", "company": "InnovateCo", "location": "Seattle, WA",
      "work_mode": "hybrid", "category": "Other", "salary_min": 110000, "salary_max": 150000,
      "status": "closed"}

LISTINGS = [FRONTEND, DEVOPS, DESIGNER, PM]


class FilterListingsTests(SimpleTestCase):
    def test_remote_within_salary_range(self):
        criteria = FilterCriteria(work_mode="remote", salary_range=(0, 200000))
        self.assertEqual(filter_listings([FRONTEND, DEVOPS], criteria), [FRONTEND])

    def test_salary_range_requires_full_containment(self):
        # 125000 max sticks out of the bounds even though the ranges overlap
        criteria = FilterCriteria(salary_range=(0, 100000))
        self.assertEqual(filter_listings([FRONTEND, DEVOPS], criteria), [])

    def test_salary_lower_bound(self):
        criteria = FilterCriteria(salary_range=(100000, 300000))
        self.assertEqual(filter_listings(LISTINGS, criteria), [DEVOPS, PM])

    def test_no_active_criteria_keeps_everything(self):
        criteria = FilterCriteria()
        self.assertFalse(criteria.is_active)
        self.assertEqual(filter_listings(LISTINGS, criteria), LISTINGS)

    def test_all_sentinel_disables_work_mode(self):
        criteria = FilterCriteria(work_mode="all")
        self.assertEqual(criteria.active_criteria(), ())
        self.assertEqual(filter_listings(LISTINGS, criteria), LISTINGS)

    def test_query_matches_title_or_company_case_insensitive(self):
        self.assertEqual(filter_listings(LISTINGS, FilterCriteria(query="devops")), [DEVOPS])
        self.assertEqual(filter_listings(LISTINGS, FilterCriteria(query="techcorp")), [FRONTEND])
        # location is not part of the free-text query
        self.assertEqual(filter_listings(LISTINGS, FilterCriteria(query="seattle")), [])

    def test_location_substring(self):
        self.assertEqual(filter_listings(LISTINGS, FilterCriteria(location="remote")), [FRONTEND, DESIGNER])
        self.assertEqual(filter_listings(LISTINGS, FilterCriteria(location="san fran")), [DEVOPS])

    def test_category_exact_match(self):
        self.assertEqual(filter_listings(LISTINGS, FilterCriteria(category="Design")), [DESIGNER])
        self.assertEqual(filter_listings(LISTINGS, FilterCriteria(category="design")), [])

    def test_criteria_are_combined_with_and(self):
        criteria = FilterCriteria(query="developer", location="remote", work_mode="remote",
                                  category="Technology", salary_range=(90000, 130000))
        self.assertEqual(filter_listings(LISTINGS, criteria), [FRONTEND])

    def test_result_is_subset_satisfying_every_criterion_and_idempotent(self):
        criteria = FilterCriteria(location="remote", salary_range=(80000, 130000))
        once = filter_listings(LISTINGS, criteria)
        self.assertTrue(all(item in LISTINGS for item in once))
        self.assertTrue(all(criteria.matches(item) for item in once))
        self.assertEqual(filter_listings(once, criteria), once)

    def test_works_on_objects(self):
        job = Job(title="Backend Engineer", company="DataStream", location="Chicago, IL",
                  work_mode="onsite", category="Engineering", salary_min=100000, salary_max=135000)
        self.assertEqual(filter_listings([job], FilterCriteria(query="backend", work_mode="onsite")), [job])


class FilterCriteriaParamsTests(SimpleTestCase):
    def test_from_params(self):
        criteria = FilterCriteria.from_params({
            "q": " Engineer ", "location": "Remote", "type": "Remote",
            "salary_min": "30000", "salary_max": "150,000", "category": "Technology",
        })
        self.assertEqual(criteria.query, "Engineer")
        self.assertEqual(criteria.work_mode, "remote")
        self.assertEqual(criteria.salary_range, (30000, 150000))
        self.assertEqual(criteria.category, "Technology")

    def test_missing_salary_bound_uses_slider_limits(self):
        self.assertEqual(FilterCriteria.from_params({"salary_min": "50000"}).salary_range, (50000, 300000))
        self.assertEqual(FilterCriteria.from_params({"salary_max": "90000"}).salary_range, (0, 90000))
        self.assertIsNone(FilterCriteria.from_params({"salary_min": "", "salary_max": ""}).salary_range)

    @override_settings(JOBBOARD_SALARY_SLIDER_MAX=500000)
    def test_slider_limit_comes_from_settings(self):
        self.assertEqual(FilterCriteria.from_params({"salary_min": "1"}).salary_range, (1, 500000))

    def test_bad_numbers_rejected(self):
        with self.assertRaises(CriteriaError):
            FilterCriteria.from_params({"salary_min": "lots"})
        for raw in ("inf", "-inf", "nan", "1e999", "9" * 400):
            with self.assertRaises(CriteriaError):
                FilterCriteria.from_params({"salary_max": raw})
        with self.assertRaises(CriteriaError):
            FilterCriteria.from_params({"salary_min": "200000", "salary_max": "100000"})

    def test_as_params_round_trip(self):
        criteria = FilterCriteria(query="dev", work_mode="hybrid", salary_range=(1, 2))
        self.assertEqual(FilterCriteria.from_params(criteria.as_params()), criteria)


class PartitionTests(SimpleTestCase):
    def test_partition_preserves_order(self):
        items = [{"id": i, "status": s} for i, s in enumerate(["active", "closed", "active", "hired", "active"])]
        self.assertEqual([i["id"] for i in partition(items, "active")], [0, 2, 4])

    def test_partitions_are_a_disjoint_cover(self):
        items = [{"id": i, "status": s} for i, s in enumerate(["pending", "reviewed", "pending", "accepted", "rejected"])]
        seen = []
        for status in {item["status"] for item in items}:
            seen.extend(item["id"] for item in partition(items, status))
        self.assertEqual(sorted(seen), [item["id"] for item in items])

    def test_status_counts(self):
        counts = status_counts(LISTINGS, ["active", "closed", "hired"])
        self.assertEqual(counts, {"active": 3, "closed": 1, "hired": 0})

    def test_compose_view_states(self):
        loading = compose_view(None)
        self.assertEqual(loading.state, LOADING)
        self.assertTrue(loading.is_loading)
        self.assertEqual(compose_view(LISTINGS, loading=True).state, LOADING)

        empty = compose_view(LISTINGS, "hired", empty_message="No hired jobs found")
        self.assertEqual(empty.state, EMPTY)
        self.assertEqual(empty.empty_message, "No hired jobs found")
        self.assertEqual(len(empty), 0)

        populated = compose_view(LISTINGS, "closed")
        self.assertEqual(populated.state, POPULATED)
        self.assertEqual(populated.items, [PM])

        self.assertEqual(compose_view([]).state, EMPTY)
        self.assertEqual(compose_view(LISTINGS).items, LISTINGS)

    def test_compose_tabs(self):
        tabs = compose_tabs(LISTINGS, LISTING_TABS)
        by_status = {tab.status: view for tab, view in tabs}
        self.assertEqual(len(by_status["active"]), 3)
        self.assertTrue(by_status["hired"].is_empty)
        self.assertEqual(by_status["hired"].empty_message, "No hired jobs found")
        self.assertEqual([t.status for t in APPLICATION_TABS], list(APPLICATION_TRANSITIONS))


class TransitionTests(SimpleTestCase):
    def test_listing_transitions(self):
        validate_transition(LISTING_TRANSITIONS, "active", "closed")
        validate_transition(LISTING_TRANSITIONS, "active", "hired")
        validate_transition(LISTING_TRANSITIONS, "closed", "active")
        for current, new in [("hired", "active"), ("hired", "closed"), ("closed", "hired"), ("active", "deleted")]:
            with self.assertRaises(IllegalTransition):
                validate_transition(LISTING_TRANSITIONS, current, new)

    def test_application_transitions(self):
        for new in ("reviewed", "accepted", "rejected"):
            validate_transition(APPLICATION_TRANSITIONS, "pending", new)
        validate_transition(APPLICATION_TRANSITIONS, "reviewed", "accepted")
        with self.assertRaises(IllegalTransition):
            validate_transition(APPLICATION_TRANSITIONS, "reviewed", "pending")
        with self.assertRaises(IllegalTransition):
            validate_transition(APPLICATION_TRANSITIONS, "accepted", "rejected")

    def test_allowed_statuses(self):
        self.assertEqual(allowed_statuses(APPLICATION_TRANSITIONS, "pending"),
                         ["pending", "reviewed", "accepted", "rejected"])
        self.assertEqual(allowed_statuses(LISTING_TRANSITIONS, "hired"), ["hired"])


class StatusMutatorTests(SimpleTestCase):
    def setUp(self):
        self.items = [dict(FRONTEND), dict(DEVOPS), dict(DESIGNER), dict(PM)]

    def test_set_status_moves_entry_between_partitions(self):
        mutator = StatusMutator(self.items, LISTING_TRANSITIONS)
        mutator.set_status(3, "hired")
        self.assertNotIn(3, [i["id"] for i in partition(self.items, "active")])
        self.assertEqual([i["id"] for i in partition(self.items, "hired")], [3])
        self.assertEqual(len(self.items), 4)

    def test_ids_compare_as_strings(self):
        mutator = StatusMutator(self.items, LISTING_TRANSITIONS)
        self.assertEqual(mutator.set_status("2", "closed")["status"], "closed")

    def test_persist_called_with_new_status(self):
        persist = mock.Mock()
        mutator = StatusMutator(self.items, LISTING_TRANSITIONS, persist=persist)
        mutator.set_status(1, "closed")
        persist.assert_called_once()
        self.assertEqual(persist.call_args[0][1], "closed")

    def test_failed_persist_rolls_back(self):
        persist = mock.Mock(side_effect=RuntimeError("offline"))
        mutator = StatusMutator(self.items, LISTING_TRANSITIONS, persist=persist)
        with self.assertRaises(CollaboratorError):
            mutator.set_status(1, "closed")
        self.assertEqual(self.items[0]["status"], "active")
        self.assertEqual(partition(self.items, "closed"), [self.items[3]])

    def test_rollback_on_objects(self):
        job = Job(id=10, title="x", status="active")
        mutator = StatusMutator([job], LISTING_TRANSITIONS, persist=mock.Mock(side_effect=CollaboratorError("no")))
        with self.assertRaises(CollaboratorError):
            mutator.set_status(10, "closed")
        self.assertEqual(job.status, "active")

    def test_illegal_transition_leaves_collection_unchanged(self):
        persist = mock.Mock()
        mutator = StatusMutator(self.items, LISTING_TRANSITIONS, persist=persist)
        with self.assertRaises(IllegalTransition):
            mutator.set_status(4, "hired")
        self.assertEqual(self.items[3]["status"], "closed")
        persist.assert_not_called()

    def test_same_status_is_a_noop(self):
        persist = mock.Mock()
        mutator = StatusMutator(self.items, LISTING_TRANSITIONS, persist=persist)
        mutator.set_status(1, "active")
        persist.assert_not_called()

    def test_unknown_id(self):
        mutator = StatusMutator(self.items, LISTING_TRANSITIONS)
        with self.assertRaises(EntityNotFound):
            mutator.set_status(99, "closed")

    def test_remove(self):
        delete = mock.Mock()
        mutator = StatusMutator(self.items, LISTING_TRANSITIONS, delete=delete)
        self.assertTrue(mutator.remove(2))
        self.assertEqual(len(self.items), 3)
        self.assertNotIn(2, [i["id"] for i in self.items])
        delete.assert_called_once()

    def test_remove_absent_is_noop(self):
        delete = mock.Mock()
        mutator = StatusMutator(self.items, LISTING_TRANSITIONS, delete=delete)
        self.assertFalse(mutator.remove(99))
        self.assertEqual(len(self.items), 4)
        delete.assert_not_called()

    def test_failed_delete_keeps_entry(self):
        mutator = StatusMutator(self.items, LISTING_TRANSITIONS, delete=mock.Mock(side_effect=OSError("down")))
        with self.assertRaises(CollaboratorError):
            mutator.remove(1)
        self.assertEqual(len(self.items), 4)


def make_job(employer, **kwargs):
    data = {
        "title": "Senior Frontend Developer",
        "company": "TechCorp",
        "location": "Remote",
        "work_mode": "remote",
        "category": "Technology",
        "salary_min": 95000,
        "salary_max": 125000,
        "description": "Build web applications.",
        "deadline": timezone.now().date() + datetime.timedelta(days=30),
    }
    data.update(kwargs)
    return Job.objects.create(employer=employer, **data)


class JobBoardViewTestCase(TestCase):
    def setUp(self):
        self.employer = User.objects.create_user(
            username="acme", password="pass", email="hr@acme.test", role="employer", company_name="Acme",
        )
        self.other_employer = User.objects.create_user(username="globex", password="pass", role="employer")
        self.seeker = User.objects.create_user(
            username="jane", password="pass", email="jane@example.com", first_name="Jane", last_name="Doe",
        )
        self.client = Client()

    def messages_of(self, response):
        return [str(m) for m in get_messages(response.wsgi_request)]


class JobListViewTests(JobBoardViewTestCase):
    def setUp(self):
        super().setUp()
        self.frontend = make_job(self.employer)
        self.devops = make_job(self.employer, title="DevOps Engineer", company="CloudTech",
                               location="San Francisco, CA", work_mode="onsite", category="Engineering",
                               salary_min=120000, salary_max=160000)
        self.closed = make_job(self.employer, title="Closed Role", status="closed")

    def test_lists_active_jobs_only(self):
        response = self.client.get(reverse("job_list"))
        self.assertEqual(response.status_code, 200)
        ids = {job.id for job in response.context["view"]}
        self.assertEqual(ids, {self.frontend.id, self.devops.id})
        self.assertContains(response, "2 jobs found")

    def test_filters_by_type_and_salary(self):
        response = self.client.get(reverse("job_list"), {"type": "remote", "salary_min": 0, "salary_max": 200000})
        self.assertEqual([job.id for job in response.context["view"]], [self.frontend.id])

    def test_empty_result_shows_message(self):
        response = self.client.get(reverse("job_list"), {"salary_min": 0, "salary_max": 100000})
        self.assertTrue(response.context["view"].is_empty)
        self.assertContains(response, "No jobs found. Try adjusting your filters.")

    def test_category_link(self):
        response = self.client.get(reverse("job_list"), {"category": "Engineering"})
        self.assertEqual([job.id for job in response.context["view"]], [self.devops.id])

    def test_bad_salary_param_falls_back_to_all(self):
        response = self.client.get(reverse("job_list"), {"salary_min": "abc"})
        self.assertEqual(len(response.context["view"]), 2)
        self.assertTrue(any("salary_min" in m for m in self.messages_of(response)))

    def test_overflowing_salary_param_falls_back_to_all(self):
        response = self.client.get(reverse("job_list"), {"salary_max": "inf"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.context["view"]), 2)
        self.assertTrue(any("salary_max" in m for m in self.messages_of(response)))

    def test_home_page(self):
        response = self.client.get(reverse("home"))
        self.assertEqual(response.status_code, 200)
        featured = response.context["featured_jobs"]
        self.assertEqual(featured[0].id, self.devops.id)
        self.assertNotIn(self.closed, response.context["recent_jobs"])

    def test_closed_job_detail_hidden_from_public(self):
        self.assertEqual(self.client.get(reverse("job_detail", args=[self.closed.id])).status_code, 404)
        self.client.force_login(self.employer)
        self.assertEqual(self.client.get(reverse("job_detail", args=[self.closed.id])).status_code, 200)

    def test_job_detail_shows_salary(self):
        response = self.client.get(reverse("job_detail", args=[self.frontend.id]))
        self.assertContains(response, "$95,000 - $125,000")


class EmployerJobViewTests(JobBoardViewTestCase):
    def test_create_job(self):
        self.client.force_login(self.employer)
        deadline = (timezone.now().date() + datetime.timedelta(days=10)).isoformat()
        response = self.client.post(reverse("job_create"), {
            "title": "Backend Engineer", "company": "Acme", "location": "Chicago, IL",
            "work_mode": "onsite", "category": "Engineering", "salary_currency": "$",
            "salary_min": 100000, "salary_max": 135000, "deadline": deadline,
            "description": "APIs", "requirements": "Python\nSQL",
        })
        self.assertRedirects(response, reverse("dashboard"))
        job = Job.objects.get(title="Backend Engineer")
        self.assertEqual(job.employer, self.employer)
        self.assertEqual(job.status, "active")
        self.assertEqual(job.requirement_list(), ["Python", "SQL"])

    def test_create_rejects_inverted_salary(self):
        self.client.force_login(self.employer)
        deadline = (timezone.now().date() + datetime.timedelta(days=10)).isoformat()
        response = self.client.post(reverse("job_create"), {
            "title": "Backend Engineer", "company": "Acme", "location": "Chicago, IL",
            "work_mode": "onsite", "category": "Engineering", "salary_currency": "$",
            "salary_min": 150000, "salary_max": 100000, "deadline": deadline, "description": "APIs",
        })
        self.assertEqual(response.status_code, 200)
        self.assertIn("salary_max", response.context["form"].errors)
        self.assertFalse(Job.objects.exists())

    def test_job_seeker_cannot_post(self):
        self.client.force_login(self.seeker)
        self.assertEqual(self.client.get(reverse("job_create")).status_code, 403)

    def test_edit_not_owned_redirects(self):
        job = make_job(self.other_employer)
        self.client.force_login(self.employer)
        response = self.client.get(reverse("job_edit", args=[job.id]))
        self.assertRedirects(response, reverse("dashboard"))

    def test_mark_hired_moves_job_to_hired_tab(self):
        job = make_job(self.employer)
        self.client.force_login(self.employer)
        response = self.client.post(reverse("job_set_status", args=[job.id]), {"status": "hired"})
        self.assertRedirects(response, reverse("dashboard") + "?tab=hired")
        job.refresh_from_db()
        self.assertEqual(job.status, "hired")

        response = self.client.get(reverse("dashboard"), {"tab": "hired"})
        tabs = {tab.status: view for tab, view in response.context["tabs"]}
        self.assertEqual([j.id for j in tabs["hired"]], [job.id])
        self.assertTrue(tabs["active"].is_empty)

    def test_hired_is_terminal(self):
        job = make_job(self.employer, status="hired")
        self.client.force_login(self.employer)
        response = self.client.post(reverse("job_set_status", args=[job.id]), {"status": "active"})
        job.refresh_from_db()
        self.assertEqual(job.status, "hired")
        self.assertTrue(any("Cannot change status" in m for m in self.messages_of(response)))

    def test_cannot_change_other_employers_job(self):
        job = make_job(self.other_employer)
        self.client.force_login(self.employer)
        self.client.post(reverse("job_set_status", args=[job.id]), {"status": "closed"})
        job.refresh_from_db()
        self.assertEqual(job.status, "active")

    def test_failed_write_leaves_status_unchanged(self):
        job = make_job(self.employer)
        self.client.force_login(self.employer)

        def failing(entity, status):
            raise CollaboratorError("database unavailable")

        with mock.patch("jobs.views.persist_status", return_value=failing):
            response = self.client.post(reverse("job_set_status", args=[job.id]), {"status": "closed"})
        job.refresh_from_db()
        self.assertEqual(job.status, "active")
        self.assertTrue(any("database unavailable" in m for m in self.messages_of(response)))

    def test_dashboard_counts(self):
        job = make_job(self.employer)
        make_job(self.employer, title="Old", status="closed")
        Application.objects.create(job=job, applicant=self.seeker, applicant_name="Jane", applicant_email="jane@example.com")
        self.client.force_login(self.employer)
        response = self.client.get(reverse("dashboard"))
        self.assertEqual(response.context["active_jobs"], 1)
        self.assertEqual(response.context["total_applications"], 1)
        self.assertEqual(response.context["new_applications"], 1)
        self.assertContains(response, "No closed jobs found", count=0)

        response = self.client.get(reverse("dashboard"), {"tab": "hired"})
        self.assertContains(response, "No hired jobs found")


class ApplicationStatusViewTests(JobBoardViewTestCase):
    def setUp(self):
        super().setUp()
        self.job = make_job(self.employer)
        self.app = Application.objects.create(
            job=self.job, applicant=self.seeker, applicant_name="Jane Doe", applicant_email="jane@example.com",
        )

    def test_applications_page_for_owner(self):
        self.client.force_login(self.employer)
        response = self.client.get(reverse("job_applications", args=[self.job.id]))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Jane Doe")
        self.assertEqual(response.context["counts"]["pending"], 1)

    def test_applications_page_status_tab(self):
        self.client.force_login(self.employer)
        response = self.client.get(reverse("job_applications", args=[self.job.id]), {"status": "accepted"})
        self.assertTrue(response.context["view"].is_empty)
        self.assertContains(response, "No accepted applications")

    def test_applications_page_not_owner(self):
        self.client.force_login(self.other_employer)
        response = self.client.get(reverse("job_applications", args=[self.job.id]))
        self.assertRedirects(response, reverse("dashboard"))

    def test_accept_sends_email(self):
        self.client.force_login(self.employer)
        response = self.client.post(reverse("application_set_status", args=[self.app.id]),
                                    {"status": "accepted", "message": "Welcome aboard"})
        self.assertRedirects(response, reverse("job_applications", args=[self.job.id]))
        self.app.refresh_from_db()
        self.assertEqual(self.app.status, "accepted")
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["jane@example.com"])
        self.assertIn("Welcome aboard", mail.outbox[0].body)
        self.assertIn("Acme", mail.outbox[0].subject)

    def test_review_sends_no_email(self):
        self.client.force_login(self.employer)
        self.client.post(reverse("application_set_status", args=[self.app.id]), {"status": "reviewed"})
        self.app.refresh_from_db()
        self.assertEqual(self.app.status, "reviewed")
        self.assertEqual(len(mail.outbox), 0)

    def test_no_email_when_applicant_opted_out(self):
        self.seeker.application_updates = False
        self.seeker.save()
        self.client.force_login(self.employer)
        self.client.post(reverse("application_set_status", args=[self.app.id]), {"status": "rejected"})
        self.app.refresh_from_db()
        self.assertEqual(self.app.status, "rejected")
        self.assertEqual(len(mail.outbox), 0)

    def test_illegal_transition_rejected(self):
        self.app.status = "accepted"
        self.app.save()
        self.client.force_login(self.employer)
        response = self.client.post(reverse("application_set_status", args=[self.app.id]), {"status": "pending"})
        self.app.refresh_from_db()
        self.assertEqual(self.app.status, "accepted")
        self.assertTrue(any("Cannot change status" in m for m in self.messages_of(response)))

    def test_other_employer_cannot_change_status(self):
        self.client.force_login(self.other_employer)
        self.client.post(reverse("application_set_status", args=[self.app.id]), {"status": "rejected"})
        self.app.refresh_from_db()
        self.assertEqual(self.app.status, "pending")


class ApplyViewTests(JobBoardViewTestCase):
    def setUp(self):
        super().setUp()
        self.media_root = tempfile.mkdtemp()
        self.settings_override = override_settings(MEDIA_ROOT=self.media_root)
        self.settings_override.enable()
        self.job = make_job(self.employer)

    def tearDown(self):
        self.settings_override.disable()
        shutil.rmtree(self.media_root, ignore_errors=True)

    def test_apply_with_resume(self):
        self.client.force_login(self.seeker)
        resume = SimpleUploadedFile("cv.pdf", b"%PDF-1.4 test", content_type="application/pdf")
        response = self.client.post(reverse("job_apply", args=[self.job.id]),
                                    {"resume": resume, "cover_letter": "Hello"})
        self.assertRedirects(response, reverse("my_applications"))
        app = Application.objects.get(job=self.job, applicant=self.seeker)
        self.assertEqual(app.status, "pending")
        self.assertEqual(app.applicant_name, "Jane Doe")
        self.assertEqual(app.applicant_email, "jane@example.com")
        self.assertTrue(app.resume.name.endswith(".pdf"))

    def stored_files(self):
        return [name for _, _, names in os.walk(self.media_root) for name in names]

    def test_failed_save_removes_uploaded_resume(self):
        self.client.force_login(self.seeker)
        for error in (DatabaseError("disk full"), IntegrityError("duplicate")):
            resume = SimpleUploadedFile("cv.pdf", b"%PDF-1.4 test", content_type="application/pdf")
            with mock.patch.object(Application, "save", side_effect=error):
                self.client.post(reverse("job_apply", args=[self.job.id]), {"resume": resume})
            self.assertFalse(Application.objects.exists())
            self.assertEqual(self.stored_files(), [])

    def test_rejects_bad_resume_type(self):
        self.client.force_login(self.seeker)
        resume = SimpleUploadedFile("cv.exe", b"MZ", content_type="application/octet-stream")
        response = self.client.post(reverse("job_apply", args=[self.job.id]), {"resume": resume})
        self.assertEqual(response.status_code, 200)
        self.assertIn("resume", response.context["form"].errors)
        self.assertFalse(Application.objects.exists())

    def test_duplicate_application_redirects(self):
        Application.objects.create(job=self.job, applicant=self.seeker, applicant_name="Jane", applicant_email="jane@example.com")
        self.client.force_login(self.seeker)
        response = self.client.post(reverse("job_apply", args=[self.job.id]), {"cover_letter": "again"})
        self.assertRedirects(response, reverse("my_applications"))
        self.assertEqual(Application.objects.count(), 1)

    def test_expired_job_not_accepting(self):
        job = make_job(self.employer, title="Expired", deadline=timezone.now().date() - datetime.timedelta(days=1))
        self.client.force_login(self.seeker)
        response = self.client.get(reverse("job_apply", args=[job.id]))
        self.assertRedirects(response, reverse("job_detail", args=[job.id]))

    def test_employer_cannot_apply(self):
        self.client.force_login(self.employer)
        self.assertEqual(self.client.get(reverse("job_apply", args=[self.job.id])).status_code, 403)


class MyApplicationsViewTests(JobBoardViewTestCase):
    def setUp(self):
        super().setUp()
        self.job = make_job(self.employer)
        self.other_job = make_job(self.employer, title="DevOps Engineer")
        self.app = Application.objects.create(
            job=self.job, applicant=self.seeker, applicant_name="Jane", applicant_email="jane@example.com",
        )
        Application.objects.create(
            job=self.other_job, applicant=self.seeker, applicant_name="Jane", applicant_email="jane@example.com",
            status="reviewed",
        )

    def test_status_tab(self):
        self.client.force_login(self.seeker)
        response = self.client.get(reverse("my_applications"), {"status": "reviewed"})
        self.assertEqual([a.job_id for a in response.context["view"]], [self.other_job.id])
        self.assertEqual(response.context["total"], 2)

    def test_withdraw(self):
        self.client.force_login(self.seeker)
        response = self.client.post(reverse("application_withdraw", args=[self.app.id]))
        self.assertRedirects(response, reverse("my_applications"))
        self.assertFalse(Application.objects.filter(id=self.app.id).exists())
        self.assertEqual(Application.objects.filter(applicant=self.seeker).count(), 1)

    def test_withdraw_someone_elses_application_is_noop(self):
        other = User.objects.create_user(username="bob", password="pass")
        self.client.force_login(other)
        response = self.client.post(reverse("application_withdraw", args=[self.app.id]))
        self.assertTrue(Application.objects.filter(id=self.app.id).exists())
        self.assertIn("Application not found.", self.messages_of(response))

    def test_withdraw_failure_keeps_application(self):
        self.client.force_login(self.seeker)
        with mock.patch.object(Application, "delete", side_effect=DatabaseError("locked")):
            response = self.client.post(reverse("application_withdraw", args=[self.app.id]))
        self.assertTrue(Application.objects.filter(id=self.app.id).exists())
        self.assertTrue(any("locked" in m for m in self.messages_of(response)))


class DeadlineTests(TestCase):
    TODAY = datetime.date(2030, 1, 1)

    def form_for(self, deadline):
        return JobForm(data={
            "title": "Backend Engineer", "company": "Acme", "location": "Chicago, IL",
            "work_mode": "onsite", "category": "Engineering", "salary_currency": "$",
            "salary_min": 100000, "salary_max": 135000, "deadline": deadline.isoformat(),
            "description": "APIs",
        })

    def test_form_and_listing_agree_on_today(self):
        yesterday = self.TODAY - datetime.timedelta(days=1)
        with mock.patch("django.utils.timezone.localdate", return_value=self.TODAY):
            self.assertTrue(self.form_for(self.TODAY).is_valid())
            self.assertTrue(Job(status="active", deadline=self.TODAY).is_open())

            self.assertIn("deadline", self.form_for(yesterday).errors)
            self.assertFalse(Job(status="active", deadline=yesterday).is_open())


class LoadSampleJobsCommandTests(TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def write_json(self, listings):
        path = os.path.join(self.tmpdir, "jobs.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump(listings, f)
        return path

    def test_invalid_choices_are_counted_as_errors(self):
        path = self.write_json([
            {"title": "Odd Listing", "company": "Acme", "location": "Remote",
             "work_mode": "Remote", "status": "archived", "category": "Nope"},
            {"title": "Good Listing", "company": "Acme", "location": "Remote",
             "work_mode": "remote", "category": "Design"},
        ])
        out, err = StringIO(), StringIO()
        call_command("load_sample_jobs", path, stdout=out, stderr=err)
        self.assertEqual(list(Job.objects.values_list("title", flat=True)), ["Good Listing"])
        self.assertIn("Created=1", out.getvalue())
        self.assertIn("Errors=1", out.getvalue())
        self.assertIn("work_mode", err.getvalue())

    def test_update_rejects_invalid_choice(self):
        call_command("load_sample_jobs", stdout=StringIO(), stderr=StringIO())
        path = self.write_json([{"title": "DevOps Engineer", "company": "CloudTech", "status": "archived"}])
        out = StringIO()
        call_command("load_sample_jobs", path, update=True, stdout=out, stderr=StringIO())
        self.assertIn("Errors=1", out.getvalue())
        self.assertEqual(Job.objects.get(title="DevOps Engineer").status, "active")

    def test_loads_builtin_samples_once(self):
        out = StringIO()
        call_command("load_sample_jobs", stdout=out, stderr=StringIO())
        self.assertEqual(Job.objects.count(), 8)
        self.assertIn("Created=8", out.getvalue())
        employer = User.objects.get(username="sample-employer")
        self.assertTrue(employer.is_employer())

        out = StringIO()
        call_command("load_sample_jobs", stdout=out, stderr=StringIO())
        self.assertEqual(Job.objects.count(), 8)
        self.assertIn("Skipped=8", out.getvalue())

    def test_rejects_job_seeker_owner(self):
        User.objects.create_user(username="jane", password="pass")
        from django.core.management.base import CommandError
        with self.assertRaises(CommandError):
            call_command("load_sample_jobs", employer="jane", stdout=StringIO(), stderr=StringIO())
