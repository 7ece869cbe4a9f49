"""Persisting calculator submissions as leads"""
import logging

from django.db import transaction

from hoh.leads.models import Lead

logger = logging.getLogger(__name__)


def save_estimate_lead(**fields):
    """Create a ``cost_estimate`` lead and its first history entry"""
    fields.setdefault('lead_type', 'cost_estimate')
    with transaction.atomic():
        lead = Lead.objects.create(**fields)
        lead.add_history('created', f'Lead created from {lead.source}')
    logger.info(f"Estimate lead created: {lead.id} ({lead.source}, {lead.estimated_cost})")
    return lead
