# services/users_service.py

from safeway.errors import NotFound

EDITABLE_FIELDS = ("name", "phone", "email", "profileImage")


def get_profile(store, uid):
    user = store.get("users", uid)
    if user is None:
        raise NotFound(f"user {uid} not found")
    user["uid"] = uid
    user.pop("id", None)
    return user


def update_profile(store, uid, data):
    changes = {k: data[k] for k in EDITABLE_FIELDS if k in data}
    if store.get("users", uid) is None:
        store.set("users", uid, changes, merge=True)
    elif changes:
        store.update("users", uid, changes)
    return get_profile(store, uid)
