"""Category tree and question flows.

The tree is a pure function of the currency code: only the budget question's
range config differs between currencies. ``get_catalog`` memoises one
immutable tree per currency.
"""

from functools import lru_cache

from zokey.schemas.catalog import BudgetPreset, Category, Question, QuestionOption, RangeConfig, Subcategory

SUPPORTED_CURRENCIES = ("GBP", "USD")
CURRENCY_SYMBOLS = {"GBP": "£", "USD": "$"}


def currency_for_region(region: str) -> str:
    return "USD" if region == "US" else "GBP"


def _options(*pairs: tuple[str, str, str]) -> tuple[QuestionOption, ...]:
    return tuple(QuestionOption(id=option_id, label=label, value=value) for option_id, label, value in pairs)


def _single_select(question_id: str, text: str, *pairs: tuple[str, str, str], required: bool = True) -> Question:
    return Question(id=question_id, text=text, type="single_select", required=required, options=_options(*pairs))


def _budget_question(currency: str, max_budget: float) -> Question:
    symbol = CURRENCY_SYMBOLS.get(currency, "£")
    presets = (
        BudgetPreset(label=f"Under {symbol}100", min=0, max=100),
        BudgetPreset(label=f"{symbol}100 - {symbol}300", min=100, max=300),
        BudgetPreset(label=f"{symbol}300 - {symbol}500", min=300, max=500),
        BudgetPreset(label=f"{symbol}500 - {symbol}1000", min=500, max=1000),
        BudgetPreset(label=f"Over {symbol}1000", min=1000, max=max_budget),
    )
    return Question(
        id="budget",
        text="What's your budget range?",
        type="range",
        required=True,
        range_config=RangeConfig(min=0, max=max_budget, step=50, currency=currency, presets=presets),
    )


def _priorities_question(*pairs: tuple[str, str]) -> Question:
    return Question(
        id="priorities",
        text="What matters most to you? (Select up to 3)",
        type="multi_select",
        required=True,
        options=tuple(QuestionOption(id=option_id, label=label, value=option_id) for option_id, label in pairs),
    )


def _subcategory(subcategory_id: str, name: str, icon: str, category_id: str, *questions: Question) -> Subcategory:
    return Subcategory(id=subcategory_id, name=name, icon=icon, category_id=category_id, questions=questions)


NO_PREFERENCE = ("any", "No preference", "any")


def build_catalog(currency: str) -> tuple[Category, ...]:
    """Build the full category tree with budget ranges in ``currency``."""
    def budget(max_budget: float) -> Question:
        return _budget_question(currency, max_budget)

    electronics = Category(
        id="electronics",
        name="Electronics & Computers",
        icon="laptopcomputer",
        description="Phones, laptops, tablets & more",
        subcategories=(
            _subcategory(
                "phones", "Smartphones", "iphone", "electronics",
                _single_select(
                    "brand", "Do you have a preferred brand?",
                    NO_PREFERENCE,
                    ("apple", "Apple", "Apple"),
                    ("samsung", "Samsung", "Samsung"),
                    ("google", "Google Pixel", "Google"),
                    ("oneplus", "OnePlus", "OnePlus"),
                    ("xiaomi", "Xiaomi", "Xiaomi"),
                    required=False,
                ),
                budget(2000),
                _priorities_question(
                    ("camera", "Camera quality"),
                    ("battery", "Battery life"),
                    ("performance", "Performance"),
                    ("display", "Display quality"),
                    ("value", "Value for money"),
                    ("compact", "Compact size"),
                ),
                _single_select(
                    "usage", "Primary use case?",
                    ("general", "General use", "general"),
                    ("photography", "Photography", "photography"),
                    ("gaming", "Mobile gaming", "gaming"),
                    ("business", "Business", "business"),
                ),
            ),
            _subcategory(
                "laptops", "Laptops", "laptopcomputer", "electronics",
                _single_select(
                    "brand", "Preferred brand?",
                    NO_PREFERENCE,
                    ("apple", "Apple MacBook", "Apple MacBook"),
                    ("dell", "Dell", "Dell"),
                    ("hp", "HP", "HP"),
                    ("lenovo", "Lenovo", "Lenovo"),
                    ("asus", "ASUS", "ASUS"),
                    required=False,
                ),
                budget(3000),
                _priorities_question(
                    ("performance", "Performance"),
                    ("portability", "Portability"),
                    ("battery", "Battery life"),
                    ("display", "Display quality"),
                    ("build", "Build quality"),
                    ("value", "Value for money"),
                ),
                _single_select(
                    "usage", "What will you mainly use it for?",
                    ("general", "General use & browsing", "general"),
                    ("work", "Work & productivity", "work"),
                    ("creative", "Creative work (video, design)", "creative"),
                    ("gaming", "Gaming", "gaming"),
                    ("coding", "Programming", "coding"),
                ),
            ),
            _subcategory(
                "tablets", "Tablets", "ipad", "electronics",
                _single_select(
                    "brand", "Preferred brand?",
                    NO_PREFERENCE,
                    ("apple", "Apple iPad", "Apple iPad"),
                    ("samsung", "Samsung Galaxy Tab", "Samsung Galaxy Tab"),
                    ("amazon", "Amazon Fire", "Amazon Fire"),
                    required=False,
                ),
                budget(1500),
                _priorities_question(
                    ("display", "Display quality"),
                    ("performance", "Performance"),
                    ("portability", "Portability"),
                    ("stylus", "Stylus support"),
                    ("value", "Value for money"),
                ),
            ),
            _subcategory(
                "headphones", "Headphones", "headphones", "electronics",
                _single_select(
                    "type", "What type of headphones?",
                    ("overear", "Over-ear", "over-ear"),
                    ("onear", "On-ear", "on-ear"),
                    ("inear", "In-ear / Earbuds", "earbuds"),
                ),
                _single_select(
                    "wireless", "Wireless preference?",
                    ("wireless", "Wireless (Bluetooth)", "wireless"),
                    ("wired", "Wired", "wired"),
                    NO_PREFERENCE,
                ),
                budget(500),
                _priorities_question(
                    ("sound", "Sound quality"),
                    ("anc", "Noise cancellation"),
                    ("comfort", "Comfort"),
                    ("battery", "Battery life"),
                    ("value", "Value for money"),
                ),
            ),
            _subcategory(
                "smartwatches", "Smartwatches", "applewatch", "electronics",
                _single_select(
                    "phone", "What phone do you use?",
                    ("iphone", "iPhone", "iPhone"),
                    ("android", "Android", "Android"),
                ),
                budget(800),
                _priorities_question(
                    ("fitness", "Fitness tracking"),
                    ("battery", "Battery life"),
                    ("design", "Design & style"),
                    ("health", "Health features"),
                    ("apps", "App ecosystem"),
                ),
            ),
        ),
    )

    home = Category(
        id="home",
        name="Home, Garden & DIY",
        icon="house.fill",
        description="Appliances, furniture & decor",
        subcategories=(
            _subcategory(
                "vacuum", "Vacuum Cleaners", "fan.fill", "home",
                _single_select(
                    "type", "What type of vacuum?",
                    ("cordless", "Cordless stick", "cordless stick"),
                    ("robot", "Robot vacuum", "robot"),
                    ("upright", "Upright", "upright"),
                    ("canister", "Canister", "canister"),
                ),
                budget(1000),
                _priorities_question(
                    ("suction", "Suction power"),
                    ("battery", "Battery life"),
                    ("quiet", "Quiet operation"),
                    ("pet", "Pet hair performance"),
                    ("value", "Value for money"),
                ),
            ),
            _subcategory(
                "coffee", "Coffee Machines", "cup.and.saucer.fill", "home",
                _single_select(
                    "type", "What type of coffee machine?",
                    ("bean", "Bean-to-cup", "bean to cup"),
                    ("pod", "Pod/Capsule", "pod capsule"),
                    ("espresso", "Espresso machine", "espresso machine"),
                    ("filter", "Filter/Drip", "filter drip"),
                ),
                budget(1500),
                _priorities_question(
                    ("quality", "Coffee quality"),
                    ("ease", "Ease of use"),
                    ("speed", "Speed"),
                    ("milk", "Milk frothing"),
                    ("value", "Value for money"),
                ),
            ),
            _subcategory(
                "airfryer", "Air Fryers", "flame.fill", "home",
                _single_select(
                    "size", "What size do you need?",
                    ("small", "Small (1-2 people)", "small compact"),
                    ("medium", "Medium (3-4 people)", "medium family"),
                    ("large", "Large (5+ people)", "large xl"),
                ),
                budget(400),
                _priorities_question(
                    ("capacity", "Capacity"),
                    ("features", "Extra features"),
                    ("easy", "Easy to clean"),
                    ("value", "Value for money"),
                ),
            ),
        ),
    )

    beauty = Category(
        id="beauty",
        name="Health & Beauty",
        icon="heart.fill",
        description="Skincare, makeup & grooming",
        subcategories=(
            _subcategory(
                "skincare", "Skincare", "drop.fill", "beauty",
                _single_select(
                    "concern", "What's your main skin concern?",
                    ("acne", "Acne & breakouts", "acne treatment"),
                    ("aging", "Anti-aging", "anti-aging"),
                    ("hydration", "Hydration", "hydrating moisturizing"),
                    ("brightening", "Brightening", "brightening vitamin c"),
                    ("sensitivity", "Sensitivity", "sensitive skin"),
                ),
                _single_select(
                    "skintype", "What's your skin type?",
                    ("oily", "Oily", "oily skin"),
                    ("dry", "Dry", "dry skin"),
                    ("combo", "Combination", "combination skin"),
                    ("normal", "Normal", "normal skin"),
                ),
                budget(200),
            ),
            _subcategory(
                "haircare", "Hair Care & Styling", "comb.fill", "beauty",
                _single_select(
                    "type", "What are you looking for?",
                    ("dryer", "Hair dryer", "hair dryer"),
                    ("straightener", "Straightener", "hair straightener"),
                    ("curler", "Curling iron", "curling iron"),
                    ("styler", "Multi-styler", "hair styler airwrap"),
                ),
                budget(500),
                _priorities_question(
                    ("results", "Styling results"),
                    ("damage", "Hair protection"),
                    ("speed", "Speed"),
                    ("value", "Value for money"),
                ),
            ),
        ),
    )

    fitness = Category(
        id="fitness",
        name="Sports & Outdoors",
        icon="figure.run",
        description="Exercise equipment & sportswear",
        subcategories=(
            _subcategory(
                "homegym", "Home Gym Equipment", "dumbbell.fill", "fitness",
                _single_select(
                    "type", "What equipment are you looking for?",
                    ("weights", "Dumbbells/Weights", "dumbbells weights"),
                    ("bench", "Weight bench", "weight bench"),
                    ("rack", "Power rack", "power rack squat"),
                    ("cardio", "Cardio machine", "treadmill exercise bike"),
                ),
                budget(2000),
                _priorities_question(
                    ("quality", "Build quality"),
                    ("compact", "Space-saving"),
                    ("versatility", "Versatility"),
                    ("value", "Value for money"),
                ),
            ),
            _subcategory(
                "running", "Running Shoes", "shoe.fill", "fitness",
                _single_select(
                    "type", "What type of running?",
                    ("road", "Road running", "road running shoes"),
                    ("trail", "Trail running", "trail running shoes"),
                    ("track", "Track/Racing", "racing shoes"),
                    ("casual", "Casual/Gym", "training shoes"),
                ),
                budget(300),
                _priorities_question(
                    ("cushion", "Cushioning"),
                    ("support", "Support"),
                    ("lightweight", "Lightweight"),
                    ("durability", "Durability"),
                    ("value", "Value for money"),
                ),
            ),
        ),
    )

    toys = Category(
        id="toys",
        name="Toys, Children & Baby",
        icon="teddybear.fill",
        description="For kids & adults",
        subcategories=(
            _subcategory(
                "kidstoys", "Kids Toys", "teddybear.fill", "toys",
                _single_select(
                    "age", "Child's age group?",
                    ("toddler", "1-3 years", "toddler toys 1-3"),
                    ("preschool", "3-5 years", "preschool toys 3-5"),
                    ("kids", "5-8 years", "kids toys 5-8"),
                    ("tweens", "8-12 years", "tween toys 8-12"),
                ),
                _single_select(
                    "type", "Type of toy?",
                    ("educational", "Educational/STEM", "educational STEM"),
                    ("creative", "Creative/Art", "creative art craft"),
                    ("active", "Active/Outdoor", "outdoor active"),
                    ("building", "Building/Construction", "building blocks LEGO"),
                ),
                budget(200),
            ),
            _subcategory(
                "videogames", "Video Games", "gamecontroller.fill", "toys",
                _single_select(
                    "platform", "Which platform?",
                    ("ps5", "PlayStation 5", "PS5 PlayStation 5"),
                    ("xbox", "Xbox Series X/S", "Xbox Series"),
                    ("switch", "Nintendo Switch", "Nintendo Switch"),
                    ("pc", "PC", "PC gaming"),
                ),
                _single_select(
                    "genre", "Preferred genre?",
                    ("action", "Action/Adventure", "action adventure"),
                    ("rpg", "RPG", "RPG role playing"),
                    ("sports", "Sports/Racing", "sports racing"),
                    ("family", "Family/Party", "family party"),
                ),
                budget(100),
            ),
        ),
    )

    fashion = Category(
        id="fashion",
        name="Clothes, Shoes & Watches",
        icon="tshirt.fill",
        description="Clothing, shoes & accessories",
        subcategories=(
            _subcategory(
                "watches", "Watches", "clock.fill", "fashion",
                _single_select(
                    "style", "What style are you looking for?",
                    ("dress", "Dress/Formal", "dress watch formal"),
                    ("casual", "Casual/Everyday", "casual watch"),
                    ("sport", "Sport/Diving", "sport dive watch"),
                    ("smart", "Smartwatch", "smartwatch"),
                ),
                budget(1000),
                _priorities_question(
                    ("design", "Design/Aesthetics"),
                    ("quality", "Build quality"),
                    ("brand", "Brand prestige"),
                    ("features", "Features"),
                    ("value", "Value for money"),
                ),
            ),
            _subcategory(
                "bags", "Bags & Backpacks", "bag.fill", "fashion",
                _single_select(
                    "type", "What type of bag?",
                    ("backpack", "Backpack", "backpack"),
                    ("laptop", "Laptop bag", "laptop bag"),
                    ("travel", "Travel/Duffel", "travel duffel bag"),
                    ("crossbody", "Crossbody/Messenger", "crossbody messenger"),
                ),
                budget(300),
                _priorities_question(
                    ("capacity", "Capacity"),
                    ("durability", "Durability"),
                    ("comfort", "Comfort"),
                    ("style", "Style"),
                    ("value", "Value for money"),
                ),
            ),
        ),
    )

    return (electronics, home, beauty, fitness, toys, fashion)


@lru_cache(maxsize=len(SUPPORTED_CURRENCIES))
def _catalog_for(currency: str) -> tuple[Category, ...]:
    return build_catalog(currency)


def get_catalog(currency: str = "GBP") -> tuple[Category, ...]:
    """Memoised catalog per currency; unsupported codes fall back to GBP."""
    if currency not in SUPPORTED_CURRENCIES:
        currency = "GBP"
    return _catalog_for(currency)


def find_subcategory(catalog: tuple[Category, ...], subcategory_id: str) -> tuple[Category, Subcategory] | None:
    for category in catalog:
        for subcategory in category.subcategories:
            if subcategory.id == subcategory_id:
                return category, subcategory
    return None
