from django import template

from ..utils.formatting import format_currency

register = template.Library()


@register.filter
def currency(amount):
    """Integer amount -> '$ 1.200'"""
    if amount is None or amount == '':
        return ''
    return format_currency(amount)


@register.simple_tag
def step_status(step, current):
    """Progress pill state of a step: 'done', 'active' or 'pending'"""
    if step < current:
        return 'done'
    if step == current:
        return 'active'
    return 'pending'


@register.filter
def cell_classes(cell):
    """CSS classes for a calendar cell"""
    classes = ['day']
    if not cell.in_current_month:
        classes.append('day--filler')
    if cell.is_disabled:
        classes.append('day--disabled')
    if cell.is_selected:
        classes.append('day--selected')
    if cell.is_today:
        classes.append('day--today')
    return ' '.join(classes)
