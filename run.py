"""
Lombok Heritage Application Entry Point
Cultural heritage catalogue and preservation analytics
"""
from lombok_heritage import create_app, db

# Create Flask application instance
app = create_app()

if __name__ == '__main__':
    with app.app_context():
        db.create_all()

    # Run development server
    app.run(
        host='0.0.0.0',
        port=5050,
        debug=True
    )
