"""
Lombok Heritage - CLI commands

Usage:
    flask --app wsgi init-db
    flask --app wsgi seed-demo
"""
import click

from lombok_heritage import db


def register_commands(app):
    """Attach database setup commands to the Flask CLI"""

    @app.cli.command('init-db')
    def init_db():
        """Create database tables"""
        db.create_all()
        click.echo("  Database tables created")

    @app.cli.command('seed-demo')
    @click.option('--seed', default=42, show_default=True, help='Random seed')
    def seed_demo(seed):
        """Populate the database with the demo Lombok catalogue"""
        from lombok_heritage.data_acquisition.demo_data_generator import LombokDemoDataGenerator
        from lombok_heritage.models import CulturalSite

        db.create_all()
        if CulturalSite.query.first() is not None:
            click.echo("  Database already contains sites, skipping")
            return

        counts = LombokDemoDataGenerator(seed=seed).generate()
        click.echo("  Demo data created:")
        for name, count in counts.items():
            click.echo(f"    {name}: {count}")

        click.echo("\nAPI Endpoints:")
        click.echo("  GET  /api/dashboard/stats")
        click.echo("  GET  /api/dashboard/growth?months=12")
        click.echo("  GET  /api/recommendations/top")
        click.echo("  GET  /api/recommendations/export.csv")
        click.echo("  GET  /api/spatial/buffers?site_id=1&site_id=2&radius=500")
        click.echo("  GET  /api/routes/<route_id>")
