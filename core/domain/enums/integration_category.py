"""Integration category enum."""
from enum import Enum


class IntegrationCategory(str, Enum):
    """Category tag of an external integration."""

    EMAIL = "email"
    SOCIAL = "social"
    PAYMENT = "payment"
    CRM = "crm"
    STORAGE = "storage"
    COMMUNICATION = "communication"
