"""
handlers/entity_handler.py
--------------------------
Routes shared by both record types. ``create_entity_router`` builds, for an
entity named ``x``:

    GET    /x        -> list, ordered by id
    POST   /addx     -> create with the next id
    DELETE /x/{id}   -> delete, then renumber the remaining rows
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from handlers.responses import error_response, get_services, utc_timestamp
from handlers.schemas import StudentIn, TeacherIn
from models.entity_type import EntityType
from models.student import STUDENT
from models.teacher import TEACHER
from services.registry import Services
from utils.logger import get_logger

logger = get_logger(__name__)


def create_entity_router(entity_type: EntityType, body_model: type[BaseModel]) -> APIRouter:
    """Build the list/add/delete routes for one entity type."""
    name = entity_type.name
    label = entity_type.label
    router = APIRouter(tags=[name])

    @router.get(f"/{name}")
    def list_records(services: Services = Depends(get_services)):
        try:
            records = services.for_entity(name).list()
            return [r.to_dict() for r in records]
        except Exception as e:
            logger.error(f"Error fetching {name}s: {e}")
            return error_response(f"Error fetching {name}s", e)

    @router.post(f"/add{name}")
    def add_record(body: body_model, services: Services = Depends(get_services)):
        try:
            record = services.for_entity(name).create(body.to_fields())
            return {
                "message": f"{label} added successfully",
                name: record.to_dict(),
                "timestamp": utc_timestamp(),
            }
        except Exception as e:
            logger.error(f"Error adding {name}: {e}")
            return error_response(f"Error adding {name}", e)

    @router.delete(f"/{name}/{{record_id}}")
    def delete_record(record_id: str, services: Services = Depends(get_services)):
        """
        Delete by id and renumber. A missing id still answers 200; an id
        that is not an integer answers 500 with the error envelope.
        """
        try:
            deleted_id = services.for_entity(name).delete(record_id)
            return {
                "message": f"{label} deleted successfully",
                "deletedId": deleted_id,
                "timestamp": utc_timestamp(),
            }
        except Exception as e:
            logger.error(f"Error deleting {name} {record_id!r}: {e}")
            return error_response(f"Error deleting {name}", e)

    return router


student_router = create_entity_router(STUDENT, StudentIn)
teacher_router = create_entity_router(TEACHER, TeacherIn)
