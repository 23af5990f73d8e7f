"""
Form Validator: Fast Buy
validate(fields) -> {field: message}. Empty dict means the form can be submitted.
"""

import re

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_RE = re.compile(r"[\d\s+().-]{7,}", re.ASCII)
PASSWORD_RE = re.compile(r"(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[!@#$%^&*\-]).{8,}", re.ASCII)

FORM_FIELDS = (
    "firstName",
    "lastName",
    "email",
    "phone",
    "country",
    "password",
    "confirmPassword",
    "paymentMethod",
    "agreeToTerms",
)

MESSAGES = {
    "firstName": "First name is required.",
    "lastName": "Last name is required.",
    "email_required": "Email is required.",
    "email_invalid": "Enter a valid email address",
    "phone_required": "Phone is required.",
    "phone_invalid": "Enter a valid phone number",
    "country": "Select a country",
    "password_required": "Password is required.",
    "password_weak": "Min 8 chars, uppercase, lowercase, number and special (!@#$%^&*-)",
    "confirm_required": "Confirm your password",
    "confirm_mismatch": "Passwords do not match",
    "paymentMethod": "Select a payment method",
    "agreeToTerms": "You must accept Terms and Conditions",
}


def _text(fields, name):
    value = fields.get(name)
    return "" if value is None else str(value)


def validate(fields):
    errors = {}

    for name in ("firstName", "lastName"):
        if not _text(fields, name).strip():
            errors[name] = MESSAGES[name]

    email = _text(fields, "email")
    if not email.strip():
        errors["email"] = MESSAGES["email_required"]
    elif not EMAIL_RE.fullmatch(email):
        errors["email"] = MESSAGES["email_invalid"]

    phone = _text(fields, "phone")
    if not phone.strip():
        errors["phone"] = MESSAGES["phone_required"]
    elif not PHONE_RE.fullmatch(phone):
        errors["phone"] = MESSAGES["phone_invalid"]

    if not _text(fields, "country"):
        errors["country"] = MESSAGES["country"]

    password = _text(fields, "password")
    if not password:
        errors["password"] = MESSAGES["password_required"]
    elif not PASSWORD_RE.fullmatch(password):
        errors["password"] = MESSAGES["password_weak"]

    confirm = _text(fields, "confirmPassword")
    if not confirm:
        errors["confirmPassword"] = MESSAGES["confirm_required"]
    elif confirm != password:
        errors["confirmPassword"] = MESSAGES["confirm_mismatch"]

    if not _text(fields, "paymentMethod"):
        errors["paymentMethod"] = MESSAGES["paymentMethod"]

    if fields.get("agreeToTerms") is not True:
        errors["agreeToTerms"] = MESSAGES["agreeToTerms"]

    return errors


def is_valid(fields):
    return not validate(fields)
