"""Spending categories and their localized display names."""
from enum import Enum
from typing import Dict, Optional, Union


class Category(str, Enum):
    """Canonical category keys. Values are the English names used for grouping."""
    SALARY = "Salary & Wages"
    TRANSFER_IN = "Transfer In"
    OTHER_INCOME = "Other Income"
    FAST_FOOD = "Fast Food"
    RESTAURANTS = "Restaurants"
    COFFEE = "Coffee & Cafes"
    FOOD_DELIVERY = "Food Delivery"
    GAS = "Gas & Fuel"
    AUTO_PAYMENT = "Auto Payment"
    RIDESHARE = "Rideshare"
    MOVIES = "Movies & Theater"
    SUBSCRIPTIONS = "Subscriptions"
    ONLINE_SHOPPING = "Online Shopping"
    GENERAL_SHOPPING = "General Shopping"
    CLOTHING = "Clothing & Fashion"
    TECHNOLOGY = "Technology"
    PERSONAL_TRANSFERS = "Personal Transfers"
    GENERAL_EXPENSES = "General Expenses"


SUPPORTED_LANGUAGES = ("en", "es")

UNCATEGORIZED_LABELS = {
    "en": "Uncategorized",
    "es": "Sin categoría",
}

# English labels are the enum values themselves
SPANISH_LABELS: Dict[Category, str] = {
    Category.SALARY: "Salario y Sueldos",
    Category.TRANSFER_IN: "Transferencia Entrante",
    Category.OTHER_INCOME: "Otros Ingresos",
    Category.FAST_FOOD: "Comida Rápida",
    Category.RESTAURANTS: "Restaurantes",
    Category.COFFEE: "Café y Cafeterías",
    Category.FOOD_DELIVERY: "Entrega de Comida",
    Category.GAS: "Gasolina y Combustible",
    Category.AUTO_PAYMENT: "Pago de Auto",
    Category.RIDESHARE: "Viajes Compartidos",
    Category.MOVIES: "Películas y Teatro",
    Category.SUBSCRIPTIONS: "Suscripciones",
    Category.ONLINE_SHOPPING: "Compras en Línea",
    Category.GENERAL_SHOPPING: "Compras Generales",
    Category.CLOTHING: "Ropa y Moda",
    Category.TECHNOLOGY: "Tecnología",
    Category.PERSONAL_TRANSFERS: "Transferencias Personales",
    Category.GENERAL_EXPENSES: "Gastos Generales",
}


def display_name(category: Optional[Union[Category, str]], language: str = "en") -> str:
    """
    Localize a category for presentation.

    Args:
        category: Category key (enum member or its canonical English value)
        language: "en" or "es"

    Returns:
        Display label; unknown languages fall back to English
    """
    if category is None or category == "":
        return UNCATEGORIZED_LABELS.get(language, UNCATEGORIZED_LABELS["en"])

    try:
        category = Category(category)
    except ValueError:
        # Not one of ours, show it as given
        return str(category)

    if language == "es":
        return SPANISH_LABELS[category]
    return category.value
