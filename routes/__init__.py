"""Blueprint registration."""


def register_blueprints(app):
    """Register all API blueprints."""
    from .families import bp as families_bp
    from .members import bp as members_bp
    from .recipes import bp as recipes_bp
    from .meal_plans import bp as meal_plans_bp
    from .grocery import bp as grocery_bp
    from .favorites import bp as favorites_bp
    from .cooking_schedule import bp as schedule_bp
    from .sides import bp as sides_bp
    from .smart_setup import bp as smart_setup_bp

    app.register_blueprint(families_bp, url_prefix='/api/families')
    app.register_blueprint(members_bp, url_prefix='/api/members')
    app.register_blueprint(recipes_bp, url_prefix='/api/recipes')
    app.register_blueprint(meal_plans_bp, url_prefix='/api/meal-plans')
    app.register_blueprint(grocery_bp, url_prefix='/api')
    app.register_blueprint(favorites_bp, url_prefix='/api/favorites')
    app.register_blueprint(schedule_bp, url_prefix='/api/cooking-schedule')
    app.register_blueprint(sides_bp, url_prefix='/api/sides')
    app.register_blueprint(smart_setup_bp, url_prefix='/api')
