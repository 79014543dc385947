from __future__ import annotations

from wedding_portal.domain.entities.pricing import (
    PricingCatalog,
    PricingType,
    ServiceCategory,
    ServiceOption,
    StreamlinedPackage,
)

VENUE_SUPPORT = "Tiny Diner Venue Support"

STREAMLINED_PACKAGE = StreamlinedPackage(
    name="Tiny Diner Signature",
    headline="Just show up and celebrate. We handle the rest.",
    description=(
        "Our streamlined celebration locks in a curated 4-hour experience with food, "
        "beverage, design touches, and a personal Tiny Diner host."
    ),
    inclusions=(
        "Dedicated Tiny Diner event host & team",
        "Up to 35 guests",
        "Passed appetizers by Local Effort",
        "Beer, wine, and craft NA beverage service",
        "On-site coordination & timeline support",
    ),
    price=4000,
    deposit_rate=0.25,
)

FOOD = ServiceCategory(
    key="food",
    label="Food style",
    vendor="Local Effort",
    default_value="buffet",
    options=(
        ServiceOption("buffet", "Local Effort seasonal buffet", "Relaxed, grazing stations ideal for mingling", PricingType.per_guest, 62),
        ServiceOption("plated", "Local Effort plated dinner", "Coursed dining with full service team", PricingType.per_guest, 88),
        ServiceOption("appetizers", "Local Effort passed appetizers", "Cocktail-forward mix & mingle experience", PricingType.per_guest, 42),
        ServiceOption("notRequired", "Outside catering support", "Not required, facility support fee per guest", PricingType.per_guest, 12, VENUE_SUPPORT),
    ),
)

BEVERAGE = ServiceCategory(
    key="beverage",
    label="Beverage",
    vendor="Tiny Diner Beverage Collective",
    default_value="wine",
    options=(
        ServiceOption("wine", "Beer, wine & NA bar", "Local selections plus coffee service", PricingType.per_guest, 26),
        ServiceOption("cocktails", "Signature cocktail program", "Custom drinks designed with our bar team", PricingType.per_guest, 34),
        ServiceOption("na", "Zero-proof service", "Craft sodas, shrubs, and espresso bar", PricingType.per_guest, 15),
        ServiceOption("notRequired", "Outside beverage program", "Not required, service oversight fee", PricingType.flat, 250, VENUE_SUPPORT),
    ),
)

CAKE = ServiceCategory(
    key="cake",
    label="Cake",
    vendor="Local Effort",
    default_value="need",
    options=(
        ServiceOption("need", "Local Effort dessert table", "Layered buttercream cakes & sweets", PricingType.flat, 480),
        ServiceOption("bring", "Couple-provided desserts", "Storage & service support from our team", PricingType.flat, 180, VENUE_SUPPORT),
        ServiceOption("notRequired", "No dessert service", "Not required for this celebration", PricingType.flat, 0),
    ),
)

FLORAL = ServiceCategory(
    key="floral",
    label="Floral",
    vendor="Studio Emme",
    default_value="inHouse",
    options=(
        ServiceOption("inHouse", "Studio Emme floral design", "Seasonal florals with candles and styling", PricingType.flat, 780),
        ServiceOption("bring", "Outside florist collaboration", "Timeline, setup, and breakdown coordination", PricingType.flat, 220, VENUE_SUPPORT),
        ServiceOption("notRequired", "Minimal styling only", "Not required, couple will keep decor simple", PricingType.flat, 0),
    ),
)

COORDINATOR = ServiceCategory(
    key="coordinator",
    label="Coordinator",
    vendor="Tiny Diner Experience Team",
    default_value="dayOf",
    options=(
        ServiceOption("fullPlanning", "Full planning partnership", "12-week planning with design and logistics", PricingType.flat, 1500),
        ServiceOption("dayOf", "Day-of coordination", "Timeline management + vendor wrangling", PricingType.flat, 750),
        ServiceOption("notRequired", "Venue host handoff", "Not required, includes operations lead", PricingType.flat, 250, VENUE_SUPPORT),
    ),
)

OFFICIANT = ServiceCategory(
    key="officiant",
    label="Officiant",
    vendor="Tiny Diner Officiant Collective",
    default_value="bring",
    options=(
        ServiceOption("provide", "Tiny Diner officiant", "Inclusive scripts + rehearsal support", PricingType.flat, 450),
        ServiceOption("bring", "Couple-provided officiant", "Timeline coordination & mic check", PricingType.flat, 180, VENUE_SUPPORT),
        ServiceOption("notRequired", "No officiant support", "Not required for this event", PricingType.flat, 0),
    ),
)


def build_catalog() -> PricingCatalog:
    return PricingCatalog(
        venue_vendor="Tiny Diner Venue & Staffing",
        venue_label="Venue reservation & staffing",
        venue_fee=2600,
        categories=(FOOD, BEVERAGE, CAKE, FLORAL, COORDINATOR, OFFICIANT),
        streamlined_package=STREAMLINED_PACKAGE,
        deposit_rate=0.25,
        checkpoint_rate=0.35,
        min_guests=10,
        max_guests=120,
        default_guest_count=35,
    )
