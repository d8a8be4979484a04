from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return "Mancala WebSocket Server is running!"

@main.route('/health')
def health():
    manager = current_app.extensions['mancala']
    return jsonify({
        'status': 'ok',
        'sessions': len(manager.store),
        'waiting': len(manager.queue),
    })
