"""
Tracker API routes.
"""
import io
import logging
from flask import Blueprint, request, jsonify, g, current_app, send_file
from sqlalchemy.exc import SQLAlchemyError
from pregnancy_bp.core.classifier import CATEGORY_LABELS, THRESHOLDS, VITAL_RANGES
from pregnancy_bp.models.reading import POSITIONS, SYMPTOMS
from pregnancy_bp.models.profile import REMINDER_CHOICES
from pregnancy_bp.services import TrackerService, ValidationFailed
from pregnancy_bp.storage import ProfileStore, ReadingStore, SqlBlobStore
from pregnancy_bp.utils.auth import current_identity, token_required
from pregnancy_bp.utils.logging_config import log_event
from pregnancy_bp.utils.export import export_filename, generate_readings_pdf, to_delimited_text

logger = logging.getLogger(__name__)

tracker_bp = Blueprint('tracker', __name__)


def _service_for(user_id) -> TrackerService:
    blobs = SqlBlobStore(user_id)
    return TrackerService(
        readings=ReadingStore(blobs),
        profiles=ProfileStore(blobs),
        clock=current_app.config['CLOCK'],
        ruleset=current_app.config['BP_RULESET'],
    )


def _storage_error(e):
    logger.error(f"Storage write failed for user {g.user_id}: {e}")
    return jsonify({'error': 'Could not save your data. Please try again.'}), 500


def _attachment(data, mimetype, filename):
    # send_file writes an RFC 5987 filename* for names outside ASCII
    return send_file(io.BytesIO(data), mimetype=mimetype,
                     as_attachment=True, download_name=filename)


@tracker_bp.route('/session', methods=['GET'])
def get_session():
    """Signed-in state as seen by the app. Never 401s."""
    signed_in, user_id, name = current_identity()
    if not signed_in:
        return jsonify({'signed_in': False, 'name': None, 'onboarding_complete': False}), 200

    profile = _service_for(user_id).get_profile()
    return jsonify({
        'signed_in': True,
        'name': name,
        'onboarding_complete': profile is not None,
    }), 200


@tracker_bp.route('/guidelines', methods=['GET'])
def get_guidelines():
    """Threshold tables, labels and accepted input ranges."""
    ruleset = current_app.config['BP_RULESET']
    return jsonify({
        'ruleset': ruleset,
        'thresholds': THRESHOLDS,
        'labels': CATEGORY_LABELS,
        'vital_ranges': {name: list(bounds) for name, bounds in VITAL_RANGES[ruleset].items()},
        'positions': list(POSITIONS),
        'symptoms': list(SYMPTOMS),
        'reminder_choices': REMINDER_CHOICES,
    }), 200


# Profile / onboarding

@tracker_bp.route('/profile', methods=['GET'])
@token_required
def get_profile():
    """Return the onboarding profile."""
    service = _service_for(g.user_id)
    profile = service.get_profile()
    if not profile:
        return jsonify({'error': 'Onboarding not completed'}), 404

    data = profile.to_dict()
    data['computedWeek'] = service.current_week()
    return jsonify(data), 200


@tracker_bp.route('/profile', methods=['POST', 'PUT'])
@token_required
def save_profile():
    """Complete (or re-run) onboarding. Replaces any existing profile."""
    data = request.get_json()
    if not data:
        return jsonify({'error': 'Request body is required'}), 400

    service = _service_for(g.user_id)
    try:
        profile = service.save_profile(data)
    except ValidationFailed as e:
        return jsonify({'error': e.errors}), 400
    except SQLAlchemyError as e:
        return _storage_error(e)

    log_event('UPDATE', 'profile')

    result = profile.to_dict()
    result['computedWeek'] = service.current_week()
    return jsonify(result), 200


@tracker_bp.route('/profile', methods=['DELETE'])
@token_required
def delete_profile():
    try:
        _service_for(g.user_id).clear_profile()
    except SQLAlchemyError as e:
        return _storage_error(e)

    log_event('CLEAR', 'profile')
    return jsonify({'message': 'Profile cleared'}), 200


# Readings

@tracker_bp.route('/readings', methods=['GET'])
@token_required
def get_readings():
    """Readings newest first, optionally limited."""
    limit = request.args.get('limit', type=int)
    if limit is not None and limit < 0:
        return jsonify({'error': 'limit must be non-negative'}), 400

    service = _service_for(g.user_id)
    shown = service.list_readings(limit)

    return jsonify({
        'readings': [r.to_dict() for r in shown],
        'total': len(service.readings),
    }), 200


@tracker_bp.route('/readings', methods=['POST'])
@token_required
def create_reading():
    """Submit a reading. Category and pregnancy week are derived, not accepted."""
    data = request.get_json()
    if not data:
        return jsonify({'error': 'Request body is required'}), 400

    service = _service_for(g.user_id)
    try:
        reading = service.record_reading(data)
    except ValidationFailed as e:
        return jsonify({'error': e.errors}), 400
    except SQLAlchemyError as e:
        return _storage_error(e)

    log_event('CREATE', 'reading', resource_id=reading.id,
              details={'category': reading.category})

    return jsonify({
        'reading': reading.to_dict(),
        'advisory': service.advisory(reading),
    }), 201


@tracker_bp.route('/readings/<reading_id>', methods=['DELETE'])
@token_required
def delete_reading(reading_id):
    try:
        removed = _service_for(g.user_id).delete_reading(reading_id)
    except SQLAlchemyError as e:
        return _storage_error(e)

    if not removed:
        return jsonify({'error': 'Reading not found'}), 404

    log_event('DELETE', 'reading', resource_id=reading_id)
    return jsonify({'message': 'Reading deleted'}), 200


@tracker_bp.route('/readings', methods=['DELETE'])
@token_required
def clear_readings():
    try:
        _service_for(g.user_id).clear_readings()
    except SQLAlchemyError as e:
        return _storage_error(e)

    log_event('CLEAR', 'reading')
    return jsonify({'message': 'All readings deleted'}), 200


# Derived views

@tracker_bp.route('/summary', methods=['GET'])
@token_required
def get_summary():
    return jsonify(_service_for(g.user_id).summary()), 200


@tracker_bp.route('/chart', methods=['GET'])
@token_required
def get_chart():
    limit = request.args.get('limit', 30, type=int)
    limit = max(0, min(limit, 200))
    return jsonify({'points': _service_for(g.user_id).chart(limit)}), 200


# Exports

@tracker_bp.route('/export.csv', methods=['GET'])
@token_required
def export_csv():
    """Download all readings as CSV."""
    service = _service_for(g.user_id)
    readings = service.list_readings()
    profile = service.get_profile()

    filename = export_filename(profile.name if profile else None, service.clock.today())
    log_event('EXPORT', 'readings_csv', details={'count': len(readings)})

    return _attachment(to_delimited_text(readings, service.ruleset).encode('utf-8'),
                       'text/csv', filename)


@tracker_bp.route('/export.pdf', methods=['GET'])
@token_required
def export_pdf():
    """Download a PDF report for the care provider."""
    service = _service_for(g.user_id)
    readings = service.list_readings()
    profile = service.get_profile()

    pdf_output = generate_readings_pdf(profile, readings, service.summary(),
                                       ruleset=service.ruleset,
                                       generated_at=service.clock.now())
    filename = export_filename(profile.name if profile else None, service.clock.today(), 'pdf')
    log_event('EXPORT', 'readings_pdf', details={'count': len(readings)})

    return _attachment(pdf_output.getvalue(), 'application/pdf', filename)
