from mancala import create_app, socketio

app = create_app()


def serve(flask_app):
    flask_app.logger.info(f"WebSocket server running on port {flask_app.config['PORT']}")
    try:
        socketio.run(
            flask_app,
            host=flask_app.config['HOST'],
            port=flask_app.config['PORT'],
            allow_unsafe_werkzeug=flask_app.config.get('ALLOW_UNSAFE_WERKZEUG', True),
        )
    finally:
        flask_app.extensions['mancala'].shutdown()


if __name__ == '__main__':
    serve(app)
