from flask import Blueprint, jsonify, current_app

main = Blueprint('main', __name__)


def _registry():
    return current_app.extensions['room_registry']


@main.route('/')
def index():
    return jsonify({
        'message': 'netplay relay is running',
        'rooms': len(_registry()),
    })


@main.route('/api/rooms')
def list_rooms():
    registry = _registry()
    rooms = registry.summary()
    return jsonify({
        'rooms': rooms,
        'max_rooms': registry.max_rooms,
        'occupied': sum(1 for r in rooms if r['players']),
    })


@main.route('/api/rooms/<int:room_id>')
def get_room(room_id):
    room = _registry().get(room_id)
    if room is None:
        return jsonify({'error': 'Room not found'}), 404
    return jsonify(room.to_dict())
