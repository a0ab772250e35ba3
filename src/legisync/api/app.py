"""
JSON API over the ingested bills, rolls and legislators.

    GET /api/bill.json?bill_id=hr1-111&sections=basic,sponsor
    GET /api/bills.json?enacted=true&order=enacted_at&per_page=50
    GET /api/rolls.json?bill_id=hr1-111&callback=handle

Responses are wrapped as {"bill": {...}} or {"bills": [...]}, and in
``callback(...);`` when a JSONP callback is given.
"""
from datetime import datetime, timezone
import json
import logging
import re
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from legisync.api.schemas import BILL, LEGISLATOR, ROLL, EntitySchema
from legisync.api.service import (
    QueryService,
    conditions_for,
    fields_for,
    order_for,
    pagination_for,
    search_conditions_for,
)
from legisync.config.constants import TIME_FORMAT
from legisync.config.settings import settings
from legisync.database.connection import get_database
from legisync.database.store import MongoStore

logger = logging.getLogger(__name__)

# a JavaScript identifier or dotted path, e.g. "handle" or "jQuery.cb_1"
CALLBACK = re.compile(r"[A-Za-z_$][\w$.]*", re.ASCII)

app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)


class RecordNotFound(Exception):
    def __init__(self, schema: EntitySchema):
        super().__init__(f"{schema.name} not found")
        self.schema = schema


def get_service() -> QueryService:
    return QueryService(MongoStore(get_database()))


def format_time(value: datetime) -> str:
    # pymongo hands back naive UTC datetimes
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.strftime(TIME_FORMAT)


def render(key: str, payload, callback: Optional[str] = None, status_code: int = 200) -> Response:
    body = json.dumps({key: jsonable_encoder(payload, custom_encoder={datetime: format_time})})
    if callback:
        body = f"{callback}({body});"
        return Response(content=body, status_code=status_code, media_type="application/javascript")
    return Response(content=body, status_code=status_code, media_type="application/json")


def callback_for(request: Request) -> Optional[str]:
    """The JSONP callback, if any. Anything but a plain JS name is a 400."""
    callback = request.query_params.get("callback")
    if callback and not CALLBACK.fullmatch(callback):
        raise StarletteHTTPException(status_code=400)
    return callback or None


@app.exception_handler(RecordNotFound)
async def record_not_found(request: Request, exc: RecordNotFound) -> Response:
    # JSONP callers can't see a 404, so they get the error in a 200
    callback = request.query_params.get("callback")
    if callback:
        error = {"code": 404, "message": f"{exc.schema.name.capitalize()} not found"}
        return render("error", error, callback)
    return Response(status_code=404)


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException) -> Response:
    return Response(status_code=exc.status_code)


def find_unique(schema: EntitySchema, request: Request, service: QueryService) -> Response:
    params = request.query_params
    callback = callback_for(request)
    fields = fields_for(schema, params.get("sections"))
    record = service.find_unique(schema, conditions_for(schema, params), fields)
    if record is None:
        raise RecordNotFound(schema)
    return render(schema.name, record, callback)


def search(schema: EntitySchema, request: Request, service: QueryService) -> Response:
    params = request.query_params
    callback = callback_for(request)
    records = service.search(
        schema,
        search_conditions_for(schema, params),
        order_for(schema, params),
        fields=fields_for(schema, params.get("sections")),
        **pagination_for(params)
    )
    return render(schema.plural, records, callback)


@app.get("/api/legislator.json")
def legislator(request: Request, service: QueryService = Depends(get_service)):
    return find_unique(LEGISLATOR, request, service)


@app.get("/api/bill.json")
def bill(request: Request, service: QueryService = Depends(get_service)):
    return find_unique(BILL, request, service)


@app.get("/api/roll.json")
def roll(request: Request, service: QueryService = Depends(get_service)):
    return find_unique(ROLL, request, service)


@app.get("/api/bills.json")
def bills(request: Request, service: QueryService = Depends(get_service)):
    return search(BILL, request, service)


@app.get("/api/rolls.json")
def rolls(request: Request, service: QueryService = Depends(get_service)):
    return search(ROLL, request, service)
