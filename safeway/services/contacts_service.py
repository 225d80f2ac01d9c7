# services/contacts_service.py

import logging

from safeway.config import DEFAULT_RELATION
from safeway.errors import NotFound, ValidationFailed
from safeway.models.types import EmergencyContact

logger = logging.getLogger(__name__)


def contacts_collection(uid):
    return f"users/{uid}/emergency_contacts"


def add_contact(store, uid, name, phone, relation=None):
    name = (name or "").strip()
    phone = (phone or "").strip()
    if not name or not phone:
        raise ValidationFailed("이름/연락처 필수")
    contact_id = store.add(contacts_collection(uid), {
        "name": name,
        "phone": phone,
        "relation": relation or DEFAULT_RELATION,
    })
    logger.info("contact %s added for %s", contact_id, uid)
    return contact_id


def list_contacts(store, uid):
    docs = store.list(contacts_collection(uid), order_by="createdAt")
    return [EmergencyContact.from_doc(d) for d in docs]


def delete_contact(store, uid, contact_id):
    if not contact_id:
        raise ValidationFailed("UID 또는 ContactID 누락")
    if store.get(contacts_collection(uid), contact_id) is None:
        raise NotFound(f"contact {contact_id} not found")
    store.delete(contacts_collection(uid), contact_id)
    logger.info("contact %s deleted for %s", contact_id, uid)
