"""Canned product records used when the live product API is unavailable.

Each template pairs a keyword set with up to five products. Records carry no
region data; currency, URLs and images are filled in per request.
"""

SYNTHETIC_TEMPLATES: tuple[dict, ...] = (
    {
        "keywords": ("phone", "smartphone", "iphone", "samsung", "android", "mobile"),
        "products": (
            {
                "asin": "MOCK001",
                "title": "Apple iPhone 15 Pro Max 256GB - Natural Titanium",
                "price": 1199.00,
                "original_price": 1199.00,
                "rating": 4.8,
                "review_count": 12453,
                "is_prime": True,
                "features": (
                    "A17 Pro chip with 6-core GPU",
                    "48MP main camera with advanced computational photography",
                    "Action button for quick access",
                    "Titanium design, lighter than ever",
                    "All-day battery life",
                ),
            },
            {
                "asin": "MOCK002",
                "title": "Samsung Galaxy S24 Ultra 256GB - Titanium Black",
                "price": 1149.00,
                "original_price": 1299.00,
                "rating": 4.7,
                "review_count": 8921,
                "is_prime": True,
                "features": (
                    "Galaxy AI built-in for instant translations",
                    "200MP adaptive camera with AI zoom",
                    "S Pen included with AI-powered features",
                    "Snapdragon 8 Gen 3 processor",
                    "5000mAh battery with fast charging",
                ),
            },
            {
                "asin": "MOCK003",
                "title": "Google Pixel 8 Pro 128GB - Obsidian",
                "price": 899.00,
                "original_price": 999.00,
                "rating": 4.6,
                "review_count": 5632,
                "is_prime": True,
                "features": (
                    "Google Tensor G3 chip with AI capabilities",
                    "Best-in-class camera with Magic Eraser",
                    "7 years of OS and security updates",
                    "Pro-level photo and video features",
                    "Super smooth 120Hz display",
                ),
            },
            {
                "asin": "MOCK004",
                "title": "OnePlus 12 5G 256GB - Silky Black",
                "price": 749.00,
                "original_price": 849.00,
                "rating": 4.5,
                "review_count": 3421,
                "is_prime": True,
                "features": (
                    "Snapdragon 8 Gen 3 flagship performance",
                    "Hasselblad camera system",
                    "100W SUPERVOOC fast charging",
                    "2K 120Hz ProXDR display",
                    "5400mAh battery",
                ),
            },
            {
                "asin": "MOCK005",
                "title": "Xiaomi 14 Ultra 512GB - Black",
                "price": 1299.00,
                "original_price": 1299.00,
                "rating": 4.4,
                "review_count": 1823,
                "is_prime": False,
                "features": (
                    "Leica Summilux lens system",
                    "1-inch main camera sensor",
                    "Snapdragon 8 Gen 3 processor",
                    "90W wired + 80W wireless charging",
                    "Professional photography features",
                ),
            },
        ),
    },
    {
        "keywords": ("laptop", "macbook", "notebook", "computer", "dell", "hp", "lenovo"),
        "products": (
            {
                "asin": "MOCK010",
                "title": 'Apple MacBook Pro 14" M3 Pro - Space Black 512GB',
                "price": 1899.00,
                "original_price": 1999.00,
                "rating": 4.9,
                "review_count": 7823,
                "is_prime": True,
                "features": (
                    "M3 Pro chip with 11-core CPU, 14-core GPU",
                    "18GB unified memory",
                    "17-hour battery life",
                    "Liquid Retina XDR display",
                    "MagSafe charging, HDMI, SD card slot",
                ),
            },
            {
                "asin": "MOCK011",
                "title": 'Dell XPS 15 - 15.6" OLED, Intel Core i7, 16GB RAM, 512GB SSD',
                "price": 1499.00,
                "original_price": 1699.00,
                "rating": 4.6,
                "review_count": 4521,
                "is_prime": True,
                "features": (
                    "Intel Core i7-13700H processor",
                    "3.5K OLED InfinityEdge display",
                    "NVIDIA GeForce RTX 4050 graphics",
                    "CNC machined aluminum construction",
                    "Windows 11 Pro",
                ),
            },
            {
                "asin": "MOCK012",
                "title": 'Lenovo ThinkPad X1 Carbon Gen 11 - 14" 2.8K OLED',
                "price": 1699.00,
                "original_price": 1899.00,
                "rating": 4.7,
                "review_count": 3214,
                "is_prime": True,
                "features": (
                    "13th Gen Intel Core i7 processor",
                    "2.8K OLED display with HDR",
                    "Military-grade durability",
                    "15+ hour battery life",
                    "Legendary ThinkPad keyboard",
                ),
            },
            {
                "asin": "MOCK013",
                "title": "ASUS ROG Zephyrus G14 - Gaming Laptop, RTX 4070, Ryzen 9",
                "price": 1599.00,
                "original_price": 1799.00,
                "rating": 4.5,
                "review_count": 2891,
                "is_prime": True,
                "features": (
                    "AMD Ryzen 9 7940HS processor",
                    "NVIDIA GeForce RTX 4070 8GB",
                    '14" QHD+ 165Hz display',
                    "AniMe Matrix LED display lid",
                    "76Wh battery with fast charging",
                ),
            },
            {
                "asin": "MOCK014",
                "title": 'HP Spectre x360 16" 2-in-1 - OLED Touch, Intel Core i7',
                "price": 1449.00,
                "original_price": 1599.00,
                "rating": 4.4,
                "review_count": 1923,
                "is_prime": True,
                "features": (
                    "Intel Core i7-1355U processor",
                    '16" 3K OLED touchscreen',
                    "360° convertible design",
                    "Included HP stylus pen",
                    "Bang & Olufsen quad speakers",
                ),
            },
        ),
    },
    {
        "keywords": ("headphone", "earbuds", "airpods", "wireless", "noise cancelling", "audio"),
        "products": (
            {
                "asin": "MOCK020",
                "title": "Sony WH-1000XM5 Wireless Noise Cancelling Headphones - Black",
                "price": 299.00,
                "original_price": 379.00,
                "rating": 4.7,
                "review_count": 15632,
                "is_prime": True,
                "features": (
                    "Industry-leading noise cancellation",
                    "30-hour battery life",
                    "Crystal clear hands-free calling",
                    "Multi-device connection",
                    "Foldable design with carry case",
                ),
            },
            {
                "asin": "MOCK021",
                "title": "Apple AirPods Pro (2nd Gen) with MagSafe Case",
                "price": 229.00,
                "original_price": 249.00,
                "rating": 4.8,
                "review_count": 23451,
                "is_prime": True,
                "features": (
                    "Active Noise Cancellation",
                    "Adaptive Transparency mode",
                    "Personalized Spatial Audio",
                    "6 hours listening, 30 with case",
                    "Touch control for volume",
                ),
            },
            {
                "asin": "MOCK022",
                "title": "Bose QuietComfort Ultra Headphones - Black",
                "price": 349.00,
                "original_price": 429.00,
                "rating": 4.6,
                "review_count": 8921,
                "is_prime": True,
                "features": (
                    "World-class noise cancellation",
                    "Immersive spatial audio",
                    "Up to 24 hours battery",
                    "CustomTune sound calibration",
                    "Plush protein leather cushions",
                ),
            },
            {
                "asin": "MOCK023",
                "title": "Samsung Galaxy Buds2 Pro - Graphite",
                "price": 159.00,
                "original_price": 219.00,
                "rating": 4.4,
                "review_count": 6723,
                "is_prime": True,
                "features": (
                    "24-bit Hi-Fi sound quality",
                    "Intelligent ANC",
                    "360 Audio with head tracking",
                    "5 hours + 18 hours with case",
                    "IPX7 water resistance",
                ),
            },
            {
                "asin": "MOCK024",
                "title": "Sennheiser Momentum 4 Wireless - Black",
                "price": 279.00,
                "original_price": 349.00,
                "rating": 4.5,
                "review_count": 4532,
                "is_prime": True,
                "features": (
                    "Audiophile-grade sound quality",
                    "60-hour battery life",
                    "Adaptive noise cancellation",
                    "Premium materials and design",
                    "aptX Adaptive codec support",
                ),
            },
        ),
    },
    {
        "keywords": ("vacuum", "dyson", "robot", "cordless", "cleaner", "hoover"),
        "products": (
            {
                "asin": "MOCK030",
                "title": "Dyson V15 Detect Absolute Cordless Vacuum",
                "price": 599.00,
                "original_price": 699.00,
                "rating": 4.7,
                "review_count": 9823,
                "is_prime": True,
                "features": (
                    "Laser reveals invisible dust",
                    "Piezo sensor counts particles",
                    "Up to 60 minutes runtime",
                    "Root Cyclone technology",
                    "LCD screen shows real-time data",
                ),
            },
            {
                "asin": "MOCK031",
                "title": "iRobot Roomba j9+ Self-Emptying Robot Vacuum",
                "price": 799.00,
                "original_price": 999.00,
                "rating": 4.5,
                "review_count": 7621,
                "is_prime": True,
                "features": (
                    "Self-emptying Clean Base",
                    "PrecisionVision Navigation",
                    "P.O.O.P. (Pet Owner Official Promise)",
                    "Smart Mapping technology",
                    "Works with Alexa and Google",
                ),
            },
            {
                "asin": "MOCK032",
                "title": "Shark IZ462H Anti Hair Wrap Cordless Vacuum",
                "price": 349.00,
                "original_price": 449.00,
                "rating": 4.4,
                "review_count": 5432,
                "is_prime": True,
                "features": (
                    "Anti Hair Wrap technology",
                    "Flexology bendable wand",
                    "Up to 80 minutes runtime",
                    "DuoClean PowerFins",
                    "LED headlights",
                ),
            },
            {
                "asin": "MOCK033",
                "title": "Roborock S8 Pro Ultra Robot Vacuum & Mop",
                "price": 1199.00,
                "original_price": 1599.00,
                "rating": 4.6,
                "review_count": 3421,
                "is_prime": True,
                "features": (
                    "Self-washing, self-emptying dock",
                    "6000Pa suction power",
                    "VibraRise 2.0 sonic mopping",
                    "Reactive 3D obstacle avoidance",
                    "3D structured light navigation",
                ),
            },
            {
                "asin": "MOCK034",
                "title": "Dyson Ball Animal 3 Upright Vacuum",
                "price": 449.00,
                "original_price": 549.00,
                "rating": 4.3,
                "review_count": 4123,
                "is_prime": True,
                "features": (
                    "Designed for homes with pets",
                    "Whole-machine HEPA filtration",
                    "Ball technology for steering",
                    "Self-adjusting cleaner head",
                    "35ft reach with hose",
                ),
            },
        ),
    },
    {
        "keywords": ("coffee", "espresso", "machine", "maker", "nespresso", "bean"),
        "products": (
            {
                "asin": "MOCK040",
                "title": "De'Longhi Magnifica Evo Bean-to-Cup Coffee Machine",
                "price": 429.00,
                "original_price": 549.00,
                "rating": 4.5,
                "review_count": 6723,
                "is_prime": True,
                "features": (
                    "Built-in burr grinder",
                    "LatteCrema automatic milk frother",
                    "13 grind settings",
                    "Touch panel controls",
                    "1.8L water tank",
                ),
            },
            {
                "asin": "MOCK041",
                "title": "Nespresso Vertuo Next Coffee Machine by Magimix",
                "price": 149.00,
                "original_price": 199.00,
                "rating": 4.4,
                "review_count": 12453,
                "is_prime": True,
                "features": (
                    "Centrifusion technology",
                    "5 cup sizes from espresso to carafe",
                    "One-touch brewing",
                    "Automatic capsule recognition",
                    "Made from 54% recycled plastic",
                ),
            },
            {
                "asin": "MOCK042",
                "title": "Sage Barista Express Impress Espresso Machine",
                "price": 699.00,
                "original_price": 799.00,
                "rating": 4.7,
                "review_count": 4521,
                "is_prime": True,
                "features": (
                    "Assisted Tamping system",
                    "Intelligent Dosing",
                    "Precise espresso extraction",
                    "Steam wand for micro-foam milk",
                    "Integrated conical burr grinder",
                ),
            },
            {
                "asin": "MOCK043",
                "title": "Moccamaster KBGV Select Coffee Brewer",
                "price": 279.00,
                "original_price": 319.00,
                "rating": 4.6,
                "review_count": 3214,
                "is_prime": True,
                "features": (
                    "SCA Golden Cup certified",
                    "Copper boiling element",
                    "Brews in 4-6 minutes",
                    "Handmade in the Netherlands",
                    "5-year warranty",
                ),
            },
            {
                "asin": "MOCK044",
                "title": "Philips 3200 Series LatteGo Fully Automatic",
                "price": 549.00,
                "original_price": 649.00,
                "rating": 4.3,
                "review_count": 5632,
                "is_prime": True,
                "features": (
                    "Easy-clean LatteGo system",
                    "5 coffee varieties at one touch",
                    "My Coffee Choice intensity settings",
                    "AquaClean filter",
                    "Ceramic grinders",
                ),
            },
        ),
    },
    {
        "keywords": ("smartwatch", "watch", "fitness", "tracker", "apple watch", "garmin"),
        "products": (
            {
                "asin": "MOCK050",
                "title": "Apple Watch Series 9 GPS 45mm - Midnight Aluminium",
                "price": 429.00,
                "original_price": 449.00,
                "rating": 4.8,
                "review_count": 18723,
                "is_prime": True,
                "features": (
                    "S9 SiP with 4-core Neural Engine",
                    "Double tap gesture control",
                    "Always-On Retina display",
                    "Blood oxygen & ECG apps",
                    "Carbon neutral with Sport Loop",
                ),
            },
            {
                "asin": "MOCK051",
                "title": "Samsung Galaxy Watch6 Classic 47mm - Silver",
                "price": 369.00,
                "original_price": 429.00,
                "rating": 4.5,
                "review_count": 7821,
                "is_prime": True,
                "features": (
                    "Rotating bezel control",
                    "Advanced sleep coaching",
                    "BioActive Sensor for health",
                    "Wear OS with Google apps",
                    "Sapphire crystal display",
                ),
            },
            {
                "asin": "MOCK052",
                "title": "Garmin Fenix 7X Solar Multisport GPS Watch",
                "price": 699.00,
                "original_price": 849.00,
                "rating": 4.7,
                "review_count": 5432,
                "is_prime": True,
                "features": (
                    "Solar charging lens",
                    "Up to 37 days battery",
                    "Multi-band GPS",
                    "Topo maps with ski resort maps",
                    "Advanced training metrics",
                ),
            },
            {
                "asin": "MOCK053",
                "title": "Fitbit Sense 2 Advanced Health Smartwatch - Graphite",
                "price": 219.00,
                "original_price": 299.00,
                "rating": 4.3,
                "review_count": 8921,
                "is_prime": True,
                "features": (
                    "Stress management with cEDA sensor",
                    "Heart rate & oxygen tracking",
                    "Sleep stages analysis",
                    "6+ day battery life",
                    "Google Assistant & Alexa built-in",
                ),
            },
            {
                "asin": "MOCK054",
                "title": "Amazfit GTR 4 Smart Watch - Superspeed Black",
                "price": 169.00,
                "original_price": 199.00,
                "rating": 4.4,
                "review_count": 4523,
                "is_prime": True,
                "features": (
                    "Dual-band GPS & 6 satellite systems",
                    "150+ sports modes",
                    "14-day battery life",
                    "Alexa built-in",
                    "AMOLED display",
                ),
            },
        ),
    },
    {
        "keywords": ("air fryer", "airfryer", "ninja", "philips", "fryer"),
        "products": (
            {
                "asin": "MOCK060",
                "title": "Ninja Foodi MAX Dual Zone Air Fryer AF400UK - 9.5L",
                "price": 219.00,
                "original_price": 269.00,
                "rating": 4.7,
                "review_count": 23451,
                "is_prime": True,
                "features": (
                    "2 independent cooking zones",
                    "9.5L total capacity",
                    "6 cooking functions",
                    "Sync & Match technology",
                    "Dishwasher-safe parts",
                ),
            },
            {
                "asin": "MOCK061",
                "title": "Philips Airfryer XXL Connected HD9867/91",
                "price": 299.00,
                "original_price": 349.00,
                "rating": 4.5,
                "review_count": 8732,
                "is_prime": True,
                "features": (
                    "Fat Removal technology",
                    "WiFi connected with app",
                    "1.4kg capacity",
                    "Rapid Air technology",
                    "NutriU app with recipes",
                ),
            },
            {
                "asin": "MOCK062",
                "title": "Cosori Pro LE 4.7L Air Fryer",
                "price": 89.00,
                "original_price": 109.00,
                "rating": 4.6,
                "review_count": 15632,
                "is_prime": True,
                "features": (
                    "9 one-touch cooking functions",
                    "Shake reminder function",
                    "Non-stick basket",
                    "Compact design",
                    "100 recipes included",
                ),
            },
            {
                "asin": "MOCK063",
                "title": "Ninja Foodi FlexDrawer 10.4L Air Fryer AF500UK",
                "price": 269.00,
                "original_price": 329.00,
                "rating": 4.6,
                "review_count": 6721,
                "is_prime": True,
                "features": (
                    "Mega Zone or 2 independent zones",
                    "10.4L total capacity",
                    "7 cooking functions",
                    "Fits whole chicken or 2 pizzas",
                    "Max Crisp technology",
                ),
            },
            {
                "asin": "MOCK064",
                "title": "Tower T17088 Vortx Vizion 7L Air Fryer",
                "price": 79.00,
                "original_price": 99.00,
                "rating": 4.3,
                "review_count": 9823,
                "is_prime": True,
                "features": (
                    "Digital touch panel",
                    "7L capacity",
                    "See-through cooking window",
                    "60-minute timer",
                    "1800W power",
                ),
            },
        ),
    },
)

# Served when no template matches, and used to backfill thin results
GENERIC_PRODUCTS: tuple[dict, ...] = (
    {
        "asin": "DEFAULT001",
        "title": "Premium Quality Product - Top Rated Choice",
        "price": 149.99,
        "original_price": 199.99,
        "rating": 4.5,
        "review_count": 2341,
        "is_prime": True,
        "features": ("High quality materials", "Best seller", "Free returns"),
    },
    {
        "asin": "DEFAULT002",
        "title": "Best Value Option - Great Performance",
        "price": 89.99,
        "original_price": 129.99,
        "rating": 4.3,
        "review_count": 1892,
        "is_prime": True,
        "features": ("Excellent value", "Reliable quality", "Fast delivery"),
    },
    {
        "asin": "DEFAULT003",
        "title": "Budget-Friendly Choice - Solid Performance",
        "price": 59.99,
        "original_price": 79.99,
        "rating": 4.1,
        "review_count": 3421,
        "is_prime": False,
        "features": ("Affordable price", "Good quality", "Popular choice"),
    },
    {
        "asin": "DEFAULT004",
        "title": "Professional Grade - Premium Features",
        "price": 299.99,
        "original_price": 349.99,
        "rating": 4.7,
        "review_count": 1234,
        "is_prime": True,
        "features": ("Professional quality", "Advanced features", "Durable"),
    },
    {
        "asin": "DEFAULT005",
        "title": "Compact & Portable - Easy to Use",
        "price": 39.99,
        "original_price": 49.99,
        "rating": 4.2,
        "review_count": 5621,
        "is_prime": True,
        "features": ("Compact design", "Easy setup", "Portable"),
    },
)
