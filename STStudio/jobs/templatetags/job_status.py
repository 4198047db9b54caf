from django import template

from jobs.status_styles import get_status_badge_classes

register = template.Library()


@register.filter(name='job_status_classes')
def job_status_classes(status_label):
    """Return background/text classes for a job status label."""

    return get_status_badge_classes(status_label)
