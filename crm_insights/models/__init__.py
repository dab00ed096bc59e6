from crm_insights.models.lead import Lead, LeadStatus
from crm_insights.models.client import Client, ClientService, ServiceStatus
from crm_insights.models.payment import Payment, PaymentStatus
from crm_insights.models.campaign import Campaign, CampaignStatus

__all__ = [
    "Lead",
    "LeadStatus",
    "Client",
    "ClientService",
    "ServiceStatus",
    "Payment",
    "PaymentStatus",
    "Campaign",
    "CampaignStatus",
]
