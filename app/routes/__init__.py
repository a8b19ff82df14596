"""Routes package for the translation backend."""


def register_routes(app):
    """Register all route blueprints with the application."""
    from .translate import translate_bp
    from .translation_cache import translation_cache_bp
    from .admin import admin_bp

    app.register_blueprint(translate_bp, url_prefix='/api/translate')
    app.register_blueprint(translation_cache_bp, url_prefix='/api/translations/cache')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
