"""
Person API - Persons Route Handlers
====================================

What:  The /persons resource: list, get, search, create, update, delete and
       the content-negotiated /persons/flexible listing.
How:   Extracts path/query/body parameters, delegates to PersonService,
       returns JSON (or XML for /flexible) with the route's status code.
Who:   Called by API clients.

Route Inventory (under settings.api_prefix):
    GET    /persons             200  list of persons
    GET    /persons/search      200  name search / paginated list
    GET    /persons/flexible    200  list as JSON or XML (Accept header)
    GET    /persons/{id}        200  person           404 unknown id
    POST   /persons             201  created person
    PUT    /persons/{id}        200  updated person   404 unknown id
    DELETE /persons/{id}        204  empty body       404 unknown id

    /search and /flexible are declared before /{person_id}, otherwise the
    typed path parameter would claim them and answer 422.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple
from xml.etree import ElementTree

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Response
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from person_api.database import get_db_session
from person_api.models.person import Person
from person_api.repositories.person_repository import SqlAlchemyPersonRepository
from person_api.schemas.person import ErrorResponse, PersonPayload, PersonResponse
from person_api.services.person_service import PersonService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/persons", tags=["Persons"])

JSON_MEDIA_TYPE = "application/json"
XML_MEDIA_TYPE = "application/xml"

# Order breaks ties: JSON wins when the client rates both equally
FLEXIBLE_MEDIA_TYPES = (JSON_MEDIA_TYPE, XML_MEDIA_TYPE)

NOT_FOUND_RESPONSE = {404: {"description": "Person not found", "model": ErrorResponse}}


# ── Dependencies ──────────────────────────────────────────────────────────

async def get_person_service(
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> PersonService:
    """
    Builds the request's service on top of the request's session.

    The session is function-scoped: get_db_session commits (or rolls back)
    when the route handler returns, before the response is sent.
    """
    return PersonService(SqlAlchemyPersonRepository(db))


# ── Content Negotiation ───────────────────────────────────────────────────

def _parse_accept(accept: str) -> List[Tuple[str, float]]:
    """Splits an Accept header into (media_range, q) pairs."""
    ranges = []
    for part in accept.split(","):
        fields = [f.strip() for f in part.split(";")]
        media_range = fields[0].lower()
        if not media_range:
            continue
        q = 1.0
        for param in fields[1:]:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    q = float(value.strip())
                except ValueError:
                    q = 0.0
        ranges.append((media_range, q))
    return ranges


def _range_specificity(media_range: str, media_type: str) -> int:
    """2 = exact, 1 = type/*, 0 = */*, -1 = no match."""
    if media_range == media_type:
        return 2
    main_type = media_type.split("/")[0]
    if media_range == f"{main_type}/*":
        return 1
    if media_range == "*/*":
        return 0
    return -1


def negotiate_media_type(
    accept: Optional[str],
    available: Tuple[str, ...] = FLEXIBLE_MEDIA_TYPES,
) -> Optional[str]:
    """
    Picks the representation for an Accept header.

    Each available type takes the q-value of the most specific range that
    matches it. The highest q wins, ties go to the earlier entry of
    `available`. A missing or empty header accepts the first entry.

    Returns:
        The chosen media type, or None when nothing available is acceptable.
    """
    if not accept or not accept.strip():
        return available[0]

    ranges = _parse_accept(accept)
    best_type = None
    best_q = 0.0
    for media_type in available:
        matched = [
            (_range_specificity(media_range, media_type), q)
            for media_range, q in ranges
        ]
        matched = [m for m in matched if m[0] >= 0]
        if not matched:
            continue
        q = max(matched)[1]
        if q > best_q:
            best_type, best_q = media_type, q
    return best_type


def _to_wire(persons: List[Person]) -> List[Dict[str, Any]]:
    return [
        PersonResponse.model_validate(person).model_dump(mode="json", by_alias=True)
        for person in persons
    ]


def render_persons_xml(items: List[Dict[str, Any]]) -> bytes:
    """
    Serializes wire dicts as <persons><person>...</person></persons>.

    Null fields are left out of the element list.
    """
    root = ElementTree.Element("persons")
    for item in items:
        element = ElementTree.SubElement(root, "person")
        for key, value in item.items():
            if value is None:
                continue
            ElementTree.SubElement(element, key).text = str(value)
    return ElementTree.tostring(root, encoding="utf-8", xml_declaration=True)


# ── Routes ────────────────────────────────────────────────────────────────

@router.get(
    "",
    response_model=List[PersonResponse],
    summary="List all persons",
)
async def get_all_persons(
    service: PersonService = Depends(get_person_service),
) -> List[Person]:
    return await service.get_all_persons()


@router.get(
    "/search",
    response_model=List[PersonResponse],
    summary="Search persons by name",
    description=(
        "Case-insensitive substring search on firstname and lastname. "
        "Without any name parameter, returns page `page` (size `size`) of all persons; "
        "with a name parameter, page and size are not applied."
    ),
)
async def search_persons(
    firstname: Optional[str] = Query(default=None, description="Firstname fragment"),
    lastname: Optional[str] = Query(default=None, description="Lastname fragment"),
    page: int = Query(default=0, ge=0, description="Zero-indexed page (listing only)"),
    size: int = Query(default=10, ge=1, description="Page size (listing only)"),
    service: PersonService = Depends(get_person_service),
) -> List[Person]:
    return await service.search(firstname, lastname, page, size)


@router.get(
    "/flexible",
    summary="List all persons as JSON or XML",
    description="Representation is chosen from the Accept header (application/json or application/xml).",
    responses={
        200: {
            "description": "List of persons",
            "content": {
                JSON_MEDIA_TYPE: {},
                XML_MEDIA_TYPE: {},
            },
        },
        406: {"description": "Neither JSON nor XML is acceptable"},
    },
)
async def get_all_flexible(
    accept: Optional[str] = Header(default=None),
    service: PersonService = Depends(get_person_service),
) -> Response:
    media_type = negotiate_media_type(accept)
    if media_type is None:
        raise HTTPException(status_code=406, detail="Not Acceptable")

    items = _to_wire(await service.get_all_persons())
    headers = {"Vary": "Accept"}
    if media_type == XML_MEDIA_TYPE:
        return Response(
            content=render_persons_xml(items),
            media_type=XML_MEDIA_TYPE,
            headers=headers,
        )
    return JSONResponse(content=items, headers=headers)


@router.get(
    "/{person_id}",
    response_model=PersonResponse,
    responses=NOT_FOUND_RESPONSE,
    summary="Get a person by id",
)
async def get_person_by_id(
    person_id: int,
    service: PersonService = Depends(get_person_service),
) -> Person:
    return await service.get_person_by_id(person_id)


@router.post(
    "",
    status_code=201,
    response_model=PersonResponse,
    summary="Create a person",
    description="`id` and `createdAt` are assigned by the server; values sent by the client are ignored.",
)
async def create_person(
    payload: PersonPayload,
    service: PersonService = Depends(get_person_service),
) -> Person:
    return await service.create_person(Person(**payload.model_dump()))


@router.put(
    "/{person_id}",
    response_model=PersonResponse,
    responses=NOT_FOUND_RESPONSE,
    summary="Update a person",
    description="Overwrites firstname, lastname and email. `id` and `createdAt` never change.",
)
async def update_person(
    person_id: int,
    payload: PersonPayload,
    service: PersonService = Depends(get_person_service),
) -> Person:
    return await service.update_person(person_id, Person(**payload.model_dump()))


@router.delete(
    "/{person_id}",
    status_code=204,
    response_class=Response,
    responses=NOT_FOUND_RESPONSE,
    summary="Delete a person",
)
async def delete_person(
    person_id: int,
    service: PersonService = Depends(get_person_service),
) -> Response:
    await service.delete_person(person_id)
    return Response(status_code=204)
