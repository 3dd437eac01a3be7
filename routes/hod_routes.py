import logging

from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models import Batch, Section, TeachingAssignment
from services.cie_rules import InvalidConfiguration
from services.cie_service import (
    get_cie_configuration, recalculate_teaching_assignment_cie, save_cie_configuration
)
from services.section_service import section_to_dict
from utils.decorators import role_required

logger = logging.getLogger(__name__)

hod_bp = Blueprint("hod", __name__, url_prefix="/hod")


# =========================================================
# CIE CONFIGURATION
# =========================================================

@hod_bp.route("/cie-config")
@login_required
@role_required("hod")
def get_cie_config():
    config = get_cie_configuration(current_user.department_id)
    return jsonify({"config": config.to_dict()})


@hod_bp.route("/cie-config", methods=["PUT"])
@login_required
@role_required("hod")
def update_cie_config():
    data = request.get_json(silent=True) or {}

    try:
        config = save_cie_configuration(current_user.department_id, data)
        db.session.commit()
    except InvalidConfiguration as exc:
        db.session.rollback()
        return jsonify({"error": str(exc), "errors": exc.errors}), 400
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Saving CIE configuration failed: %s", exc)
        return jsonify({"error": str(exc)}), 500

    return jsonify({"status": "success", "config": config.to_dict()})


# =========================================================
# SECTIONS
# =========================================================

@hod_bp.route("/sections")
@login_required
@role_required("hod")
def list_sections():
    rows = (
        db.session.query(Section, Batch)
        .join(Batch, Section.batch_id == Batch.batch_id)
        .filter(Section.department_id == current_user.department_id)
        .order_by(Batch.start_year.desc(), Section.section_name.asc())
        .all()
    )

    sections = [section_to_dict(section, batch) for section, batch in rows]
    # Persist any refreshed year/semester snapshots
    db.session.commit()

    return jsonify({"sections": sections})


# =========================================================
# CIE RECALCULATION
# =========================================================

@hod_bp.route("/assignments/<int:teaching_assignment_id>/recalculate", methods=["POST"])
@login_required
@role_required("hod")
def recalculate_assignment(teaching_assignment_id):
    assignment = TeachingAssignment.query.filter_by(
        teaching_assignment_id=teaching_assignment_id,
        department_id=current_user.department_id
    ).first()
    if not assignment:
        return jsonify({"error": "Assignment not found"}), 404

    try:
        count = recalculate_teaching_assignment_cie(teaching_assignment_id)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("CIE recalculation failed: %s", exc)
        return jsonify({"error": str(exc)}), 500

    return jsonify({"status": "success", "students": count})
