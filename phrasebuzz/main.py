from flask import Blueprint, jsonify

from phrasebuzz.services.game.dispatcher import action_names

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({
        'message': 'Welcome to the phrasebuzz game server!',
        'actions': action_names(),
    })
