# jobs/email_utils.py
from django.core.mail import EmailMessage
from django.conf import settings


def _format_from_name():
    return getattr(settings, "DEFAULT_FROM_EMAIL", "Job Board <no-reply@jobboard.local>")


def send_accepted_email(applicant_email, applicant_name, employer_name, job_title, message=""):
    """
    Tells the applicant their application was accepted.
    """
    subject = f"[{job_title}] Good news from {employer_name}"
    lines = [
        f"Hi {applicant_name},",
        "",
        f"Congratulations, your application for {job_title} has been accepted.",
        "",
    ]
    if message:
        lines.append("Message from the employer:")
        lines.append(message)
        lines.append("")
    lines.append(f"{employer_name} will be in touch about next steps.")
    body = "\n".join(lines)

    email = EmailMessage(subject=subject, body=body, from_email=_format_from_name(), to=[applicant_email])
    email.send(fail_silently=False)
    return True


def send_reject_email(applicant_email, applicant_name, employer_name, job_title, message=""):
    """
    Sends rejection email (plain text).
    """
    subject = f"[{job_title}] Application update from {employer_name}"
    lines = [
        f"Hi {applicant_name},",
        "",
        f"Thank you for applying for {job_title}. We appreciate your interest.",
        "",
    ]
    if message:
        lines.append("Message from the employer:")
        lines.append(message)
        lines.append("")
    lines.append("We wish you all the best in your job search.")
    body = "\n".join(lines)

    email = EmailMessage(subject=subject, body=body, from_email=_format_from_name(), to=[applicant_email])
    email.send(fail_silently=False)
    return True


STATUS_EMAILS = {
    'accepted': send_accepted_email,
    'rejected': send_reject_email,
}
