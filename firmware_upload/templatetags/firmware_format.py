from django import template
from ..utils import format_file_size

register = template.Library()


@register.filter
def filesize(value):
    try:
        return format_file_size(int(value))
    except (TypeError, ValueError):
        return ''
