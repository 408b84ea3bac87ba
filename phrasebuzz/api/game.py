from flask import Blueprint, jsonify, request, current_app, send_from_directory, abort


game = Blueprint('game', __name__)


def get_dispatcher():
    return current_app.extensions['game']


@game.route('/action', methods=['POST'])
def run_action():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    body, status = get_dispatcher().dispatch(data)
    return jsonify(body), status


@game.route('/state', methods=['GET'])
def get_state():
    return jsonify(get_dispatcher().public_state())


@game.route('/photos/<path:filename>', methods=['GET'])
def get_photo(filename):
    directory = current_app.config.get('WINNER_PHOTO_DIR')
    if not directory:
        abort(404)
    return send_from_directory(directory, filename)
