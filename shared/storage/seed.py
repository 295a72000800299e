"""
shared/storage/seed.py
Initial catalog, location registry and demo professionals.
Loaded on startup when the store is empty.
"""

import logging
from decimal import Decimal
from typing import Optional

from shared.models.models import UserRole
from shared.storage.base import Storage
from shared.utils.security import UNUSABLE_PASSWORD, hash_password

logger = logging.getLogger(__name__)


CATEGORIES = [
    {"id": "1", "name": "Electrician", "name_nepali": "बिजुली मिस्त्री",
     "description": "Electrical repairs, wiring, and installations",
     "icon": "fas fa-bolt", "color": "yellow"},
    {"id": "2", "name": "Plumber", "name_nepali": "प्लम्बर",
     "description": "Pipe repairs, bathroom fittings, and water systems",
     "icon": "fas fa-wrench", "color": "blue"},
    {"id": "3", "name": "House Cleaning", "name_nepali": "घर सफाई",
     "description": "Deep cleaning, regular cleaning, and sanitization",
     "icon": "fas fa-broom", "color": "green"},
    {"id": "4", "name": "AC Repair", "name_nepali": "ए.सी. मर्मत",
     "description": "AC service, repair, and installation",
     "icon": "fas fa-snowflake", "color": "cyan"},
    {"id": "5", "name": "Carpenter", "name_nepali": "सुतारी",
     "description": "Furniture making, repairs, and woodwork",
     "icon": "fas fa-hammer", "color": "amber"},
    {"id": "6", "name": "Painting", "name_nepali": "रंगाई",
     "description": "Interior and exterior painting services",
     "icon": "fas fa-paint-roller", "color": "purple"},
    {"id": "7", "name": "Appliance Repair", "name_nepali": "उपकरण मर्मत",
     "description": "TV, washing machine, and appliance repairs",
     "icon": "fas fa-tools", "color": "red"},
    {"id": "8", "name": "Pest Control", "name_nepali": "कीरा नियन्त्रण",
     "description": "Safe and effective pest control services",
     "icon": "fas fa-bug", "color": "teal"},
    {"id": "9", "name": "Gardening", "name_nepali": "बगैंचा",
     "description": "Garden maintenance and landscaping",
     "icon": "fas fa-leaf", "color": "emerald"},
    {"id": "10", "name": "Security Guard", "name_nepali": "सुरक्षा गार्ड",
     "description": "Professional security services",
     "icon": "fas fa-shield-alt", "color": "gray"},
]

# (id, category_id, name, name_nepali, description, base_price, unit, minutes)
SERVICES = [
    ("1", "1", "Electrical Wiring", "बिजुली तार", "Complete house wiring and rewiring", "800.00", "hour", 120),
    ("2", "1", "Switch & Socket Installation", "स्विच र सकेट", "Install switches, sockets, and electrical outlets", "300.00", "fixed", 30),
    ("3", "1", "Fan Installation", "पंखा जडान", "Ceiling fan installation and repair", "500.00", "fixed", 45),
    ("4", "2", "Pipe Repair", "पाइप मर्मत", "Fix leaky pipes and water lines", "600.00", "hour", 60),
    ("5", "2", "Bathroom Fitting", "बाथरुम फिटिंग", "Complete bathroom fixtures installation", "1500.00", "fixed", 180),
    ("6", "2", "Tap & Faucet Repair", "धारा मर्मत", "Fix and replace taps and faucets", "400.00", "fixed", 30),
    ("7", "3", "Deep House Cleaning", "गहिरो सफाई", "Complete house deep cleaning service", "1200.00", "fixed", 240),
    ("8", "3", "Regular Cleaning", "नियमित सफाई", "Daily or weekly house cleaning", "800.00", "fixed", 120),
    ("9", "4", "AC Service & Cleaning", "ए.सी. सेवा", "AC cleaning and maintenance", "1500.00", "fixed", 90),
    ("10", "4", "AC Installation", "ए.सी. जडान", "New AC installation service", "2500.00", "fixed", 180),
    ("11", "5", "Furniture Repair", "फर्निचर मर्मत", "Repair and restore furniture", "700.00", "hour", 90),
    ("12", "5", "Custom Furniture", "कस्टम फर्निचर", "Make custom furniture pieces", "1000.00", "hour", 360),
    ("13", "6", "Interior Painting", "भित्री रंगाई", "Interior wall painting", "400.00", "sq_ft", 480),
    ("14", "7", "TV Repair", "टि.भी. मर्मत", "Television and electronics repair", "800.00", "fixed", 75),
    ("15", "8", "Home Pest Control", "घर कीरा नियन्त्रण", "Complete home pest control treatment", "1200.00", "fixed", 120),
]

LOCATIONS = [
    ("1", "Kathmandu", "काठमाडौं"),
    ("2", "Pokhara", "पोखरा"),
    ("3", "Lalitpur", "ललितपुर"),
    ("4", "Bhaktapur", "भक्तपुर"),
    ("5", "Chitwan", "चितवन"),
    ("6", "Butwal", "बुटवल"),
    ("7", "Biratnagar", "विराटनगर"),
    ("8", "Birgunj", "वीरगंज"),
]

PROFESSIONAL_USERS = [
    {"id": "prof1", "username": "ram_bahadur", "email": "ram@jaruri-chha.com",
     "full_name": "Ram Bahadur", "phone": "9841000001"},
    {"id": "prof2", "username": "hari_sharma", "email": "hari@jaruri-chha.com",
     "full_name": "Hari Sharma", "phone": "9841000002"},
    {"id": "prof3", "username": "krishna_thapa", "email": "krishna@jaruri-chha.com",
     "full_name": "Krishna Thapa", "phone": "9841000003"},
]

PROFESSIONALS = [
    {
        "id": "1",
        "user_id": "prof1",
        "bio": "Experienced electrician with 10+ years in residential and commercial projects",
        "experience": 10,
        "skills": ["Electrical Wiring", "Switch Installation", "Fan Installation"],
        "service_areas": ["Kathmandu", "Lalitpur", "Bhaktapur"],
        "service_ids": ["1", "2", "3"],
        "location_ids": ["1", "3", "4"],
        "hourly_rate": "800.00",
        "rating": "4.80",
    },
    {
        "id": "2",
        "user_id": "prof2",
        "bio": "Professional house cleaning service with eco-friendly products",
        "experience": 5,
        "skills": ["Deep Cleaning", "Regular Cleaning", "Sanitization"],
        "service_areas": ["Kathmandu", "Lalitpur"],
        "service_ids": ["7", "8"],
        "location_ids": ["1", "3"],
        "hourly_rate": "600.00",
        "rating": "4.90",
    },
    {
        "id": "3",
        "user_id": "prof3",
        "bio": "Expert plumber specializing in modern bathroom fittings and repairs",
        "experience": 8,
        "skills": ["Pipe Repair", "Bathroom Fitting", "Tap Repair"],
        "service_areas": ["Kathmandu", "Pokhara"],
        "service_ids": ["4", "5", "6"],
        "location_ids": ["1", "2"],
        "hourly_rate": "750.00",
        "rating": "4.70",
    },
]


async def seed(
    storage: Storage,
    admin_email: Optional[str] = None,
    admin_password: Optional[str] = None,
) -> None:
    """Load the initial data set. Caller checks storage.is_empty() first."""
    for category in CATEGORIES:
        await storage.create_category(category)

    for sid, cat_id, name, name_np, desc, price, unit, minutes in SERVICES:
        await storage.create_service({
            "id": sid,
            "category_id": cat_id,
            "name": name,
            "name_nepali": name_np,
            "description": desc,
            "base_price": Decimal(price),
            "unit": unit,
            "estimated_duration": minutes,
        })

    for lid, name, name_np in LOCATIONS:
        await storage.create_location({"id": lid, "name": name, "name_nepali": name_np})

    for user in PROFESSIONAL_USERS:
        await storage.create_user({
            **user,
            "password_hash": UNUSABLE_PASSWORD,
            "role": UserRole.PROFESSIONAL.value,
            "is_verified": True,
        })

    for prof in PROFESSIONALS:
        await storage.create_professional({
            **prof,
            "hourly_rate": Decimal(prof["hourly_rate"]),
            "rating": Decimal(prof["rating"]),
            "is_verified": True,
            "availability_status": "available",
        })

    if admin_email and admin_password:
        await storage.create_user({
            "username": "admin",
            "email": admin_email,
            "password_hash": hash_password(admin_password),
            "full_name": "Administrator",
            "role": UserRole.ADMIN.value,
            "is_verified": True,
        })

    logger.info(
        "Seeded storage",
        extra={
            "backend": storage.name,
            "categories": len(CATEGORIES),
            "services": len(SERVICES),
            "locations": len(LOCATIONS),
            "professionals": len(PROFESSIONALS),
        },
    )
