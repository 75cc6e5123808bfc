"""
Entry point for the Campus Vote API.

Usage:
    python run.py

The API listens on the port from the PORT environment variable (default 5000).
"""

from campusvote import create_app, shutdown_app

app = create_app()

if __name__ == '__main__':
    port = app.config['PORT']
    print("=" * 50)
    print("Campus Vote API")
    print("=" * 50)
    print(f"\nListening on http://localhost:{port}")
    print("\nPress Ctrl+C to stop the server")
    print("=" * 50)

    try:
        app.run(
            host='0.0.0.0',
            port=port,
            debug=app.config['DEBUG']
        )
    finally:
        shutdown_app(app)
