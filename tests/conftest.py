"""
Shared fixtures: an in-memory app per test, factories for the common rows,
and a stand-in Anthropic client.
"""

import os
import sys
from types import SimpleNamespace

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app, seed_sides_library  # noqa: E402
from models import db, Family, FamilyMember, Recipe  # noqa: E402


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        seed_sides_library()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_family(app):
    def factory(**fields):
        fields.setdefault('name', 'Test Family')
        family = Family(**fields)
        db.session.add(family)
        db.session.commit()
        return family
    return factory


@pytest.fixture
def make_member(app):
    def factory(family, **fields):
        fields.setdefault('name', 'Alex')
        fields.setdefault('dietary_style', 'omnivore')
        member = FamilyMember(family_id=family.id, **fields)
        db.session.add(member)
        db.session.commit()
        return member
    return factory


@pytest.fixture
def make_recipe(app):
    def factory(name, **fields):
        fields.setdefault('cuisine', 'american')
        fields.setdefault('cook_minutes', 30)
        fields.setdefault('source_type', 'seeded')
        recipe = Recipe(name=name, **fields)
        db.session.add(recipe)
        db.session.commit()
        return recipe
    return factory


@pytest.fixture
def catalog(make_recipe):
    """A small catalog with a spread of cuisines, proteins and cook times."""
    return [
        make_recipe('Chicken Tacos', cuisine='mexican', protein_type='chicken', cook_minutes=25,
                    ingredients=[{'name': 'chicken thighs', 'quantity': 1, 'unit': 'lb', 'category': 'protein'},
                                 {'name': 'tortillas', 'quantity': 8, 'unit': 'whole', 'category': 'grains'}]),
        make_recipe('Vegetable Curry', cuisine='indian', vegetarian=True, cook_minutes=35,
                    leftovers_score=4,
                    ingredients=[{'name': 'chickpeas', 'quantity': 1, 'unit': 'can', 'category': 'pantry'},
                                 {'name': 'onion', 'quantity': 1, 'unit': 'whole', 'category': 'produce'}]),
        make_recipe('Spaghetti Bolognese', cuisine='italian', protein_type='beef', cook_minutes=40,
                    leftovers_score=4, allergens=['gluten'],
                    ingredients=[{'name': 'spaghetti', 'quantity': 1, 'unit': 'lb', 'category': 'grains'},
                                 {'name': 'ground beef', 'quantity': 1, 'unit': 'lb', 'category': 'protein'},
                                 {'name': 'onion', 'quantity': 1, 'unit': 'whole', 'category': 'produce'}]),
        make_recipe('Salmon Rice Bowl', cuisine='japanese', protein_type='fish', cook_minutes=30,
                    allergens=['fish'],
                    ingredients=[{'name': 'salmon', 'quantity': 1, 'unit': 'lb', 'category': 'protein'},
                                 {'name': 'rice', 'quantity': 2, 'unit': 'cup', 'category': 'grains'}]),
        make_recipe('Black Bean Quesadillas', cuisine='mexican', vegetarian=True, cook_minutes=15,
                    allergens=['dairy'],
                    ingredients=[{'name': 'black beans', 'quantity': 1, 'unit': 'can', 'category': 'pantry'},
                                 {'name': 'cheddar', 'quantity': 2, 'unit': 'cup', 'category': 'dairy'}]),
        make_recipe('Greek Salad', cuisine='mediterranean', vegetarian=True, cook_minutes=10,
                    ingredients=[{'name': 'cucumber', 'quantity': 1, 'unit': 'whole', 'category': 'produce'},
                                 {'name': 'feta', 'quantity': 4, 'unit': 'oz', 'category': 'dairy'}]),
        make_recipe('Pork Stir Fry', cuisine='chinese', protein_type='pork', cook_minutes=20,
                    ingredients=[{'name': 'pork loin', 'quantity': 1, 'unit': 'lb', 'category': 'protein'},
                                 {'name': 'broccoli', 'quantity': 2, 'unit': 'cup', 'category': 'produce'}]),
        make_recipe('Slow Roast Beef', cuisine='american', protein_type='beef', cook_minutes=180,
                    leftovers_score=5,
                    ingredients=[{'name': 'beef chuck', 'quantity': 3, 'unit': 'lb', 'category': 'protein'}]),
        make_recipe('Mushroom Risotto', cuisine='italian', vegetarian=True, cook_minutes=45,
                    allergens=['dairy'],
                    ingredients=[{'name': 'arborio rice', 'quantity': 1.5, 'unit': 'cup', 'category': 'grains'},
                                 {'name': 'mushrooms', 'quantity': 8, 'unit': 'oz', 'category': 'produce'}]),
        make_recipe('Turkey Burgers', cuisine='american', protein_type='turkey', cook_minutes=25,
                    ingredients=[{'name': 'ground turkey', 'quantity': 1, 'unit': 'lb', 'category': 'protein'},
                                 {'name': 'buns', 'quantity': 4, 'unit': 'whole', 'category': 'grains'}]),
    ]


class FakeMessages:
    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    def create(self, **params):
        self.calls.append(params)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(content=[SimpleNamespace(type='text', text=reply)])


class FakeAnthropic:
    def __init__(self, replies):
        self.messages = FakeMessages(replies)


@pytest.fixture
def fake_llm(monkeypatch):
    """Install a fake Anthropic client; replies are JSON strings or exceptions to raise."""
    def install(*replies):
        client = FakeAnthropic(replies)
        monkeypatch.setattr('services.smart_setup.get_client', lambda api_key: client)
        return client
    return install
