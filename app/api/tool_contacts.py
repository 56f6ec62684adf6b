"""tool-contacts function: find, get and upsert contacts for the assistant."""

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.api.function_helpers import FunctionError, error_response, read_json_body
from app.core.logging import get_logger
from app.core.schemas_contacts import ContactSummary, ContactUpsert
from app.db import contacts as contacts_db
from app.db.conversations import log_tool_action

logger = get_logger(__name__)

router = APIRouter()


def _find(user_id: str, params: dict[str, Any]) -> dict[str, Any]:
    rows = contacts_db.find_contacts(user_id, params.get("q"))
    return {"contacts": [ContactSummary.model_validate(r).model_dump(mode="json") for r in rows]}


def _get(user_id: str, params: dict[str, Any]) -> dict[str, Any]:
    contact = contacts_db.get_contact(user_id, params.get("id") or "")
    if not contact:
        raise FunctionError("Contact not found", status_code=404)
    return contact


def _upsert(user_id: str, params: dict[str, Any]) -> dict[str, Any]:
    data = ContactUpsert.model_validate(params)

    # Only non-empty optional fields are written
    fields: dict[str, Any] = {"name": data.name}
    for key in ("phone", "email", "notes"):
        value = getattr(data, key)
        if value:
            fields[key] = value

    if data.id:
        contact = contacts_db.update_contact(user_id, data.id, fields)
        if not contact:
            raise FunctionError("Contact not found", status_code=404)
    else:
        contact = contacts_db.insert_contact(user_id, fields)

    updated = data.id is not None
    log_tool_action(
        user_id,
        title="Contact Updated" if updated else "Contact Created",
        text=f"{'Updated' if updated else 'Created'} contact: {data.name}",
        metadata={
            "kind": "contact_action",
            "action": "update" if updated else "create",
            "contactId": contact["id"],
            "name": data.name,
        },
    )
    return {"id": contact["id"]}


ACTIONS = {
    "find": _find,
    "get": _get,
    "upsert": _upsert,
}


@router.post("/tool-contacts")
async def tool_contacts(request: Request) -> JSONResponse:
    """
    Dispatch a contact action.

    Body: {userId, action: "find"|"get"|"upsert", ...params}
    """
    try:
        body = await read_json_body(request)
        user_id = body.pop("userId", None)
        action = body.pop("action", None)

        logger.info(f"Contact action: {action} for user: {user_id}")

        handler = ACTIONS.get(action)
        if handler is None:
            raise FunctionError("Invalid action. Use find, get, or upsert.", status_code=400)
        if not user_id:
            raise ValueError("Missing required fields: userId")

        return JSONResponse(content=handler(user_id, body))

    except FunctionError as e:
        logger.warning(f"tool-contacts rejected request: {e.message}")
        return error_response(e)
    except Exception as e:
        logger.exception(f"Error in tool-contacts: {e}")
        return error_response(e)
