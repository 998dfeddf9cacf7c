"""
storefront/utils/constants.py

Purpose: Centralized static content

- Menu catalogue served by the API
- User-facing response messages
- Collection names

(Prevents hardcoding across the codebase)
"""

# ============================================================
# COLLECTIONS
# ============================================================

USERS_COLLECTION = "users"
SESSIONS_COLLECTION = "sessions"

# ============================================================
# CART LIMITS
# ============================================================

# Largest quantity a single cart line may hold
MAX_LINE_QUANTITY = 999

# ============================================================
# MENU CATALOGUE
# ============================================================

# Insertion order is the display order on the storefront
MENU_ITEMS = {
    "Punugulu": {"price": 25, "desc": "Crispy, fluffy South Indian snack", "image": "Assets/Punugulu.jpg"},
    "Bajji": {"price": 25, "desc": "Street-style, hot bajjis", "image": "Assets/Bajji.jpg"},
    "Vada": {"price": 25, "desc": "Donut-style, crispy vada", "image": "Assets/Vada.jpg"},
    "Idli": {"price": 25, "desc": "Soft and fluffy idlis", "image": "Assets/Idli.jpg"},
    "Dosa": {"price": 25, "desc": "Thin and crispy dosa", "image": "Assets/Dosa.jpg"},
    "Upma": {"price": 20, "desc": "Spicy, healthy upma", "image": "Assets/Upma.jpg"},
    "Pesarattu": {"price": 30, "desc": "Green gram crepe from Andhra", "image": "Assets/Pesarattu.jpg"},
    "Bites": {"price": 25, "desc": "Assorted South Indian snacks", "image": "Assets/Dosa.jpg"},
}

# ============================================================
# AUTH MESSAGES
# ============================================================

SIGNUP_SUCCESS_MESSAGE = "Signup successful!"
SIGNIN_SUCCESS_MESSAGE = "Login successful!"
PROFILE_UPDATED_MESSAGE = "Profile updated"
LOGOUT_MESSAGE = "Logged out"

USER_EXISTS_MESSAGE = "User already exists!"
USER_NOT_FOUND_MESSAGE = "User not found"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
NOT_LOGGED_IN_MESSAGE = "Not logged in"
INVALID_MOBILE_MESSAGE = "Enter a valid mobile number"
INVALID_PASSWORD_MESSAGE = "Password must be non-empty and at most 72 bytes"
INVALID_NAME_MESSAGE = "Name is required"

# ============================================================
# CART & FAVORITES MESSAGES
# ============================================================

INVALID_CART_DATA_MESSAGE = "Invalid cart data"
INVALID_QUANTITY_MESSAGE = "Quantity must be a positive whole number"
QUANTITY_LIMIT_MESSAGE = "Quantity cannot exceed 999 per item"
CART_ITEM_NOT_FOUND_MESSAGE = "Item not found in cart"
CART_ITEM_REMOVED_MESSAGE = "Item removed from cart"
INVALID_FAVORITE_DATA_MESSAGE = "Invalid favorite data"
FAVORITE_REMOVED_MESSAGE = "Item removed from favorites"
MENU_ITEM_NOT_FOUND_MESSAGE = "Item not found"
