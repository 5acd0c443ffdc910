# jobs/management/commands/load_sample_jobs.py
import datetime
import json
import os

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from jobs.models import Job

User = get_user_model()

SAMPLE_JOBS = [
    {"title": "Senior Frontend Developer", "company": "TechCorp", "location": "Remote", "work_mode": "remote",
     "category": "Technology", "salary_min": 95000, "salary_max": 125000},
    {"title": "Full Stack Engineer", "company": "WebSolutions", "location": "New York, NY", "work_mode": "hybrid",
     "category": "Technology", "salary_min": 105000, "salary_max": 140000},
    {"title": "DevOps Engineer", "company": "CloudTech", "location": "San Francisco, CA", "work_mode": "onsite",
     "category": "Engineering", "salary_min": 120000, "salary_max": 160000},
    {"title": "UI/UX Designer", "company": "DesignStudio", "location": "Remote", "work_mode": "remote",
     "category": "Design", "salary_min": 85000, "salary_max": 110000},
    {"title": "React Native Developer", "company": "MobileApps", "location": "Austin, TX", "work_mode": "hybrid",
     "category": "Technology", "salary_min": 90000, "salary_max": 120000},
    {"title": "Backend Engineer", "company": "DataStream", "location": "Chicago, IL", "work_mode": "onsite",
     "category": "Engineering", "salary_min": 100000, "salary_max": 135000},
    {"title": "Product Manager", "company": "InnovateCo", "location": "Seattle, WA", "work_mode": "hybrid",
     "category": "Other", "salary_min": 110000, "salary_max": 150000},
    {"title": "Data Scientist", "company": "AnalyticsPro", "location": "Boston, MA", "work_mode": "onsite",
     "category": "Technology", "salary_min": 115000, "salary_max": 155000},
]

FIELDS = ('company', 'location', 'work_mode', 'category', 'salary_min', 'salary_max',
          'salary_currency', 'description', 'requirements', 'status')


class Command(BaseCommand):
    help = (
        "Seed job listings for local development.\n\n"
        "Without a path the built-in sample listings are loaded. A JSON file must be an array of objects like:\n"
        '[{"title":"Backend Engineer","company":"Acme","location":"Remote","work_mode":"remote",'
        '"category":"Technology","salary_min":90000,"salary_max":120000,"deadline_days":30}, ...]\n'
        "Listings are matched by employer + title + company to avoid duplicates."
    )

    def add_arguments(self, parser):
        parser.add_argument('path', nargs='?', type=str, help='Optional path to a JSON file of listings.')
        parser.add_argument('--employer', default='sample-employer', help='Username owning the listings (created if missing).')
        parser.add_argument('--update', action='store_true', help='Update existing listings instead of skipping them.')

    def _load(self, path):
        if not path:
            return SAMPLE_JOBS
        if not os.path.exists(path):
            raise CommandError(f"File not found: {path}")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise CommandError(f"Failed to load JSON: {exc}")
        if not isinstance(data, list):
            raise CommandError("JSON root must be a list/array of listing objects.")
        return data

    def handle(self, *args, **options):
        data = self._load(options['path'])
        update = options['update']

        employer, made = User.objects.get_or_create(
            username=options['employer'],
            defaults={'role': User.ROLE_EMPLOYER, 'email': f"{options['employer']}@jobboard.local"},
        )
        if made:
            employer.set_unusable_password()
            employer.save()
            self.stdout.write(f"Created employer '{employer.username}'")
        elif not employer.is_employer():
            raise CommandError(f"User '{employer.username}' is not an employer account.")

        created = updated = skipped = errors = 0
        today = timezone.localdate()

        for idx, item in enumerate(data, start=1):
            try:
                title = str(item.get('title', '')).strip()
                if not title:
                    self.stderr.write(f"[{idx}] Skipping: missing title.")
                    skipped += 1
                    continue

                defaults = {k: item[k] for k in FIELDS if item.get(k) not in (None, '')}
                defaults.setdefault('description', f"{title} at {defaults.get('company', 'our company')}.")
                low = int(defaults.get('salary_min', Job._meta.get_field('salary_min').default))
                high = int(defaults.get('salary_max', Job._meta.get_field('salary_max').default))
                if low > high:
                    raise ValueError("salary_min is greater than salary_max")
                defaults['deadline'] = today + datetime.timedelta(days=int(item.get('deadline_days', 30)))

                existing = Job.objects.filter(employer=employer, title=title, company=defaults.get('company', '')).first()
                if existing:
                    if update:
                        for k, v in defaults.items():
                            setattr(existing, k, v)
                        existing.full_clean()
                        existing.save()
                        updated += 1
                        self.stdout.write(f"[{idx}] Updated: '{title}'")
                    else:
                        skipped += 1
                        self.stdout.write(f"[{idx}] Exists, skipped: '{title}'")
                    continue

                job = Job(employer=employer, title=title, **defaults)
                job.full_clean()
                job.save()
                created += 1
                self.stdout.write(f"[{idx}] Created: '{title}'")

            except ValidationError as e:
                errors += 1
                problems = "; ".join(f"{field}: {' '.join(msgs)}" for field, msgs in e.message_dict.items())
                self.stderr.write(f"[{idx}] INVALID: {problems}")
            except Exception as e:
                errors += 1
                self.stderr.write(f"[{idx}] ERROR: {e}")

        self.stdout.write(self.style.SUCCESS(f"Load finished. Created={created}, Updated={updated}, Skipped={skipped}, Errors={errors}"))
