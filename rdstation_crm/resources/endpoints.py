"""Endpoint paths of the RD Station CRM API, relative to the base URL."""

from urllib.parse import quote

DEALS = "deals"
DEAL_BY_ID = "deals/{id}"
CONTACTS = "contacts"
CONTACT_BY_ID = "contacts/{id}"


def endpoint_for(template: str, resource_id: str) -> str:
    """
    Substitute a resource identifier into an endpoint template.

    Args:
        template: Path template (e.g., "deals/{id}")
        resource_id: Resource identifier, percent-encoded before substitution

    Returns:
        Endpoint path

    Raises:
        ValueError: If resource_id is empty
    """
    if not resource_id:
        raise ValueError("A resource identifier is required")
    return template.replace("{id}", quote(str(resource_id), safe=""))
