"""
Reference foods for nutrition lookups.
Values are per 100 grams of the food.
Sources: USDA FoodData Central
"""
from types import MappingProxyType


def _food(name, category, calories, protein, carbs, fats, fiber, sugar, sodium, servings):
    return {
        "name": name,
        "category": category,
        "nutrition": {
            "calories": calories,
            "protein": protein,
            "carbs": carbs,
            "fats": fats,
            "fiber": fiber,
            "sugar": sugar,
            "sodium": sodium,
        },
        "common_servings": [
            {"name": serving, "multiplier": multiplier} for serving, multiplier in servings
        ],
    }


_FOODS = {
    # Proteins
    "chicken breast": _food("Chicken Breast (skinless)", "protein", 165, 31, 0, 3.6, 0, 0, 74, [
        ("1 medium breast (150g)", 1.5), ("1 cup diced (140g)", 1.4),
    ]),
    "salmon": _food("Salmon (Atlantic, farmed)", "protein", 208, 25, 0, 12, 0, 0, 44, [
        ("1 fillet (150g)", 1.5),
    ]),
    "eggs": _food("Eggs (large)", "protein", 155, 13, 1.1, 11, 0, 1.1, 124, [
        ("1 large egg (50g)", 0.5), ("2 large eggs (100g)", 1),
    ]),
    "greek yogurt": _food("Greek Yogurt (plain, non-fat)", "protein", 130, 11, 9, 5, 0, 9, 50, [
        ("1 cup (245g)", 2.45), ("1/2 cup (123g)", 1.23),
    ]),

    # Carbohydrates
    "brown rice": _food("Brown Rice (cooked)", "carbs", 111, 2.6, 23, 0.9, 1.8, 0.4, 5, [
        ("1 cup cooked (195g)", 1.95), ("1/2 cup cooked (98g)", 0.98),
    ]),
    "white rice": _food("White Rice (cooked)", "carbs", 130, 2.7, 28, 0.3, 0.4, 0.1, 1, [
        ("1 cup cooked (158g)", 1.58), ("1/2 cup cooked (79g)", 0.79),
    ]),
    "oats": _food("Oats (raw)", "carbs", 389, 16.9, 66, 6.9, 10.6, 0, 2, [
        ("1/2 cup dry (40g)", 0.4), ("1 cup cooked (234g)", 2.34),
    ]),
    "quinoa": _food("Quinoa (cooked)", "carbs", 120, 4.4, 22, 1.9, 2.8, 0.9, 7, [
        ("1 cup cooked (185g)", 1.85),
    ]),
    "sweet potato": _food("Sweet Potato (baked)", "carbs", 90, 2, 21, 0.2, 3.3, 6.8, 7, [
        ("1 medium (128g)", 1.28), ("1 cup cubed (133g)", 1.33),
    ]),

    # Fruits
    "banana": _food("Banana", "fruits", 89, 1.1, 23, 0.3, 2.6, 12, 1, [
        ("1 medium banana (118g)", 1.18), ("1 large banana (136g)", 1.36),
    ]),
    "apple": _food("Apple (with skin)", "fruits", 52, 0.3, 14, 0.2, 2.4, 10, 1, [
        ("1 medium apple (182g)", 1.82), ("1 cup sliced (109g)", 1.09),
    ]),
    "blueberries": _food("Blueberries", "fruits", 57, 0.7, 14, 0.3, 2.4, 10, 1, [
        ("1 cup (148g)", 1.48), ("1/2 cup (74g)", 0.74),
    ]),
    "strawberries": _food("Strawberries", "fruits", 32, 0.7, 8, 0.3, 2, 4.9, 1, [
        ("1 cup whole (152g)", 1.52), ("1 cup sliced (166g)", 1.66),
    ]),

    # Vegetables
    "broccoli": _food("Broccoli (cooked)", "vegetables", 35, 2.4, 7, 0.4, 3.3, 1.9, 32, [
        ("1 cup chopped (156g)", 1.56), ("1 stalk medium (148g)", 1.48),
    ]),
    "spinach": _food("Spinach (raw)", "vegetables", 23, 2.9, 3.6, 0.4, 2.2, 0.4, 79, [
        ("1 cup (30g)", 0.3), ("1 cup cooked (180g)", 1.8),
    ]),
    "carrots": _food("Carrots (raw)", "vegetables", 41, 0.9, 10, 0.2, 2.8, 4.7, 69, [
        ("1 medium carrot (61g)", 0.61), ("1 cup chopped (128g)", 1.28),
    ]),

    # Nuts and seeds
    "almonds": _food("Almonds", "nuts", 579, 21, 22, 50, 12, 4.4, 1, [
        ("1 oz (28g)", 0.28), ("1/4 cup (30g)", 0.3),
    ]),
    "walnuts": _food("Walnuts", "nuts", 654, 15, 14, 65, 6.7, 2.6, 2, [
        ("1 oz (28g)", 0.28), ("1/4 cup halves (30g)", 0.3),
    ]),
    "peanut butter": _food("Peanut Butter (natural)", "nuts", 588, 25, 20, 50, 8, 9, 17, [
        ("1 tbsp (16g)", 0.16), ("2 tbsp (32g)", 0.32),
    ]),

    # Dairy
    "milk": _food("Milk (2% fat)", "dairy", 50, 3.3, 5, 2, 0, 5, 44, [
        ("1 cup (244g)", 2.44), ("1/2 cup (122g)", 1.22),
    ]),
    "cheese cheddar": _food("Cheddar Cheese", "dairy", 403, 25, 3.4, 33, 0, 0.5, 653, [
        ("1 oz (28g)", 0.28), ("1 cup shredded (113g)", 1.13),
    ]),

    # Beverages
    "orange juice": _food("Orange Juice (fresh)", "beverages", 45, 0.7, 10, 0.2, 0.2, 8.1, 1, [
        ("1 cup (248g)", 2.48), ("1/2 cup (124g)", 1.24),
    ]),
}

FOOD_CATALOG = MappingProxyType(_FOODS)

# grams per unit; volumes assume the density of water
UNIT_TO_GRAMS = MappingProxyType({
    "kg": 1000,
    "grams": 1,
    "g": 1,
    "ml": 1,
    "liters": 1000,
    "cups": 240,
    "tablespoons": 15,
    "teaspoons": 5,
    "ounces": 28.35,
    "oz": 28.35,
    "pounds": 453.59,
    "lbs": 453.59,
})

MEAL_SUGGESTIONS = MappingProxyType({
    "breakfast": ("oats", "eggs", "banana", "greek yogurt", "milk", "blueberries"),
    "lunch": ("chicken breast", "brown rice", "quinoa", "salmon", "sweet potato", "broccoli"),
    "dinner": ("salmon", "chicken breast", "quinoa", "sweet potato", "spinach", "carrots"),
    "snack": ("almonds", "apple", "greek yogurt", "peanut butter", "strawberries", "carrots"),
})
