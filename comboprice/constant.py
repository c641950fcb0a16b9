"""Editable static catalog: toppings, sauces, instruction tiles and combos."""

from __future__ import annotations

# Entries use the same camelCase shape the store's menu documents carry;
# comboprice.data parses them into dataclasses.

TOPPINGS: list[dict[str, object]] = [
    {"id": "pepperoni", "name": "Pepperoni", "price": 1.50, "category": "Meat", "isGlutenFree": True, "isKeto": True},
    {"id": "italian_sausage", "name": "Italian Sausage", "price": 1.50, "category": "Meat", "isKeto": True},
    {"id": "bacon", "name": "Bacon", "price": 1.75, "category": "Meat", "isGlutenFree": True, "isKeto": True},
    {"id": "ham", "name": "Ham", "price": 1.50, "category": "Meat", "isGlutenFree": True, "isKeto": True},
    {"id": "grilled_chicken", "name": "Grilled Chicken", "price": 2.00, "category": "Meat", "isGlutenFree": True, "isKeto": True},
    {"id": "mushrooms", "name": "Mushrooms", "price": 1.00, "category": "Veggie", "isVegetarian": True, "isVegan": True, "isGlutenFree": True, "isKeto": True},
    {"id": "green_peppers", "name": "Green Peppers", "price": 1.00, "category": "Veggie", "isVegetarian": True, "isVegan": True, "isGlutenFree": True, "isKeto": True},
    {"id": "red_onions", "name": "Red Onions", "price": 1.00, "category": "Veggie", "isVegetarian": True, "isVegan": True, "isGlutenFree": True},
    {"id": "black_olives", "name": "Black Olives", "price": 1.00, "category": "Veggie", "isVegetarian": True, "isVegan": True, "isGlutenFree": True, "isKeto": True},
    {"id": "jalapenos", "name": "Jalapenos", "price": 1.00, "category": "Veggie", "isVegetarian": True, "isVegan": True, "isGlutenFree": True, "isKeto": True},
    {"id": "pineapple", "name": "Pineapple", "price": 1.25, "category": "Veggie", "isVegetarian": True, "isVegan": True, "isGlutenFree": True},
    {"id": "extra_cheese", "name": "Extra Cheese", "price": 2.00, "category": "Cheese", "isVegetarian": True, "isGlutenFree": True, "isKeto": True},
    {"id": "feta", "name": "Feta", "price": 1.75, "category": "Cheese", "isVegetarian": True, "isGlutenFree": True, "isKeto": True},
]

SAUCES: list[dict[str, object]] = [
    {"id": "mild", "name": "Mild", "price": 0.50, "isSpicy": False},
    {"id": "medium", "name": "Medium", "price": 0.50, "isSpicy": True},
    {"id": "hot", "name": "Hot", "price": 0.50, "isSpicy": True},
    {"id": "honey_garlic", "name": "Honey Garlic", "price": 0.75, "isSpicy": False},
    {"id": "bbq", "name": "BBQ", "price": 0.75, "isSpicy": False},
    {"id": "lemon_pepper", "name": "Lemon Pepper", "price": 0.75, "isSpicy": False},
    {"id": "suicide", "name": "Suicide", "price": 0.75, "isSpicy": True},
    {"id": "ranch", "name": "Ranch", "price": 0.99, "category": "Dip", "isSpicy": False},
    {"id": "blue_cheese", "name": "Blue Cheese", "price": 0.99, "category": "Dip", "isSpicy": False},
    {"id": "garlic_dip", "name": "Garlic Dip", "price": 0.99, "category": "Dip", "isSpicy": False},
]

PIZZA_INSTRUCTIONS: list[dict[str, object]] = [
    {"id": "well_done", "label": "Well Done", "sortOrder": 1, "isActive": True},
    {"id": "light_sauce", "label": "Light Sauce", "sortOrder": 2, "isActive": True},
    {"id": "extra_sauce", "label": "Extra Sauce", "sortOrder": 3, "isActive": True},
    {"id": "cut_squares", "label": "Cut in Squares", "sortOrder": 4, "isActive": True},
    {"id": "no_cut", "label": "Do Not Cut", "sortOrder": 5, "isActive": False},
]

WING_INSTRUCTIONS: list[dict[str, object]] = [
    {"id": "extra_crispy", "label": "Extra Crispy", "sortOrder": 1, "isActive": True},
    {"id": "sauce_on_side", "label": "Sauce on Side", "sortOrder": 2, "isActive": True},
    {"id": "tossed_twice", "label": "Tossed Twice", "sortOrder": 3, "isActive": True},
]

COMBOS: list[dict[str, object]] = [
    {
        "id": "two_pizza_deal",
        "name": "Two Pizza Deal",
        "price": 29.99,
        "items": [
            {"type": "pizza", "quantity": 2, "itemId": "large_pizza", "itemName": "Large Pizza", "toppingLimit": 3},
            {"type": "drink", "quantity": 1, "itemName": "Pop", "availableSizes": ["355ml", "2L"], "defaultSize": "2L"},
        ],
    },
    {
        "id": "party_pack",
        "name": "Party Pack",
        "price": 44.99,
        "items": [
            {
                "type": "pizza",
                "quantity": 1,
                "itemId": "xl_pizza",
                "itemName": "XL Pizza",
                "toppingLimit": 4,
                "pricingMode": "flat",
                "flatRatePrice": 2.00,
                "halfPizzaMultiplier": 0.5,
            },
            {"type": "wings", "quantity": 2, "itemName": "1 lb Wings", "sauceLimit": 1},
            {"type": "dipping", "quantity": 1, "itemName": "Dipping Sauce", "maxDipping": 2},
            {"type": "side", "quantity": 1, "itemName": "Fries", "availableSizes": ["Small", "Large"]},
        ],
    },
]
