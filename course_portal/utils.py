import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from course_portal.exceptions import InternalError, NotFound

logger = logging.getLogger(__name__)


def commit_or_500(db: Session, error_message: str) -> None:
    """Commit, turning any persistence failure into a logged, generic 500"""
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(error_message)
        raise InternalError()


def commit_update(db: Session, model, row_id: int, label: str) -> None:
    """
    Commit an update of `model` row `row_id`.

    A stale-row failure means someone else touched the row first: if it is
    gone by now the client gets a 404, otherwise the failure is a 500.
    """
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        if db.query(model.id).filter(model.id == row_id).first() is None:
            raise NotFound(f"{label} not found.")
        logger.exception(
            "Concurrency error occurred while updating the %s with ID %s.", label.lower(), row_id
        )
        raise InternalError()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("An error occurred while updating the %s with ID %s.", label.lower(), row_id)
        raise InternalError()
