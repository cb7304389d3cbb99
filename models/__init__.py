"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db, JSONList, JSONDict

from .family import Family, FamilyMember
from .recipe import Recipe
from .mealplan import MealPlan, MealPlanItem, RecipeUsage, item_sort_key
from .grocery import GroceryItem
from .favorites import FavoriteChef, FavoriteMeal, FavoriteSide, FavoriteWebsite
from .schedule import CookingScheduleDay, MainAssignment, LunchNeed
from .sides import SideLibraryEntry

__all__ = [
    'db',
    'JSONList',
    'JSONDict',
    'Family',
    'FamilyMember',
    'Recipe',
    'MealPlan',
    'MealPlanItem',
    'RecipeUsage',
    'item_sort_key',
    'GroceryItem',
    'FavoriteChef',
    'FavoriteMeal',
    'FavoriteSide',
    'FavoriteWebsite',
    'CookingScheduleDay',
    'MainAssignment',
    'LunchNeed',
    'SideLibraryEntry',
]
