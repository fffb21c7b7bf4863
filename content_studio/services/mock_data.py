"""Template data for the mock generation webhook."""

AUTOFILL_BY_DOMAIN = {
    "tesla.com": {
        "targetAudience": "Tech-savvy drivers, early adopters and sustainability-minded buyers aged 25-55",
        "brandTone": "Innovative, premium, bold, mission-driven",
        "keyOffer": "Electric vehicles and energy products with class-leading software and performance",
    },
    "nike.com": {
        "targetAudience": "Athletes and active-lifestyle consumers of every level",
        "brandTone": "Motivational, empowering, performance-driven",
        "keyOffer": "Performance footwear, apparel and gear that helps people move further",
    },
    "airbnb.com": {
        "targetAudience": "Leisure and business travellers looking for local, authentic stays",
        "brandTone": "Welcoming, inclusive, community-focused",
        "keyOffer": "Unique homes and experiences hosted by locals worldwide",
    },
    "default": {
        "targetAudience": "Modern buyers who value quality, clarity and a brand they can trust",
        "brandTone": "Professional, trustworthy, customer-focused",
        "keyOffer": "Products and services that solve a concrete problem and deliver measurable value",
    },
}

ANGLES = [
    {
        "header": "Thought Leadership & Industry Insights",
        "description": "### Why it works\nPosition the brand as the expert voice: trends, predictions and "
        "**hard-won lessons** from the field.\n- Share data the audience can't get elsewhere\n- Take a clear stance",
        "tonality": "Authoritative yet approachable",
        "objective": "Establish the brand as the go-to reference in its category",
    },
    {
        "header": "Customer Success Stories",
        "description": "Show real transformations. Each story follows **before → turning point → after** "
        "and ends with a concrete number.",
        "tonality": "Inspiring and authentic",
        "objective": "Build trust through social proof",
    },
    {
        "header": "Behind the Scenes",
        "description": "Open the doors: the team, the process, the mistakes. People buy from people.",
        "tonality": "Candid and warm",
        "objective": "Humanize the brand and deepen loyalty",
    },
    {
        "header": "Myth Busting",
        "description": "Pick the beliefs holding buyers back and dismantle them with evidence.",
        "tonality": "Confident and direct",
        "objective": "Reframe the market narrative in the brand's favour",
    },
    {
        "header": "Practical How-To Guides",
        "description": "Step-by-step, immediately useful content that solves a small problem for free.",
        "tonality": "Helpful and clear",
        "objective": "Generate qualified demand through usefulness",
    },
    {
        "header": "Future of the Category",
        "description": "Paint the picture of where the industry is going and the brand's role in it.",
        "tonality": "Visionary",
        "objective": "Position the brand as the category's future",
    },
    {
        "header": "Community Spotlight",
        "description": "Celebrate the people using the product: creators, partners and champions.",
        "tonality": "Celebratory and inclusive",
        "objective": "Turn customers into advocates",
    },
]

IDEAS = {
    "twitter": [
        {"topic": "5 signs you've outgrown your current tools", "description": "A punchy thread listing the warning signs.", "imagePrompt": "minimal chart showing growth plateau"},
        {"topic": "The one metric Brand teams ignore", "description": "Hot take with a single supporting stat.", "imagePrompt": "bold typography with a single data point"},
        {"topic": "What we learned shipping 100 releases", "description": "Lessons thread, one per tweet.", "imagePrompt": "team collaboration around a whiteboard"},
        {"topic": "Unpopular opinion about onboarding", "description": "Contrarian opener, practical close.", "imagePrompt": "split screen before and after"},
        {"topic": "Customer win of the week", "description": "Short story with a quote and a number.", "imagePrompt": "happy customer in a modern office"},
        {"topic": "Myth vs fact", "description": "Two-tweet format debunking a common belief.", "imagePrompt": "myth vs fact graphic"},
        {"topic": "A day in the life of our support team", "description": "Behind-the-scenes thread.", "imagePrompt": "support team at work, candid"},
        {"topic": "Predictions for next year", "description": "Three predictions, each with a reason.", "imagePrompt": "futuristic technology skyline"},
        {"topic": "The checklist we use before every launch", "description": "Save-worthy checklist thread.", "imagePrompt": "clean checklist graphic"},
        {"topic": "Ask me anything", "description": "Open question to spark replies.", "imagePrompt": "speech bubbles illustration"},
        {"topic": "Tool stack teardown", "description": "Tools we use and why.", "imagePrompt": "flat lay of a laptop and tools"},
    ],
    "linkedin": [
        {"topic": "How Brand cut onboarding time in half", "description": "Case study post with the three changes that mattered.", "imagePrompt": "business dashboard with improving chart"},
        {"topic": "Leadership lessons from a failed launch", "description": "Vulnerable story with clear takeaways.", "imagePrompt": "professional reflecting by a window"},
        {"topic": "The hiring question that changed our team", "description": "Story plus the actual question.", "imagePrompt": "interview in a bright office"},
        {"topic": "Industry report: 3 numbers that surprised us", "description": "Data-led post with commentary.", "imagePrompt": "data visualization with three highlighted numbers"},
        {"topic": "Why we publish our roadmap", "description": "Transparency as a strategy.", "imagePrompt": "roadmap timeline graphic"},
        {"topic": "Client spotlight", "description": "Celebrate a customer and their results.", "imagePrompt": "client team photo, professional"},
        {"topic": "What buyers actually ask in demos", "description": "Top questions and honest answers.", "imagePrompt": "business meeting with laptop"},
        {"topic": "The future of work in our category", "description": "Forward-looking opinion post.", "imagePrompt": "future workplace technology"},
        {"topic": "Our framework for prioritizing features", "description": "Share the framework with an example.", "imagePrompt": "framework diagram"},
        {"topic": "Milestone: thank you post", "description": "Gratitude post crediting the team and customers.", "imagePrompt": "team celebration"},
    ],
    "newsletter": [
        {"topic": "The complete guide to getting started", "description": "Long-form education issue with sections and resources.", "imagePrompt": "guide cover with education theme"},
        {"topic": "Monthly roundup: what changed and why", "description": "Product news, industry links and one deep dive.", "imagePrompt": "newsletter header with calendar"},
        {"topic": "Case study deep dive", "description": "Full story of one customer, with numbers.", "imagePrompt": "business growth chart"},
        {"topic": "Reader questions answered", "description": "Q&A issue from audience replies.", "imagePrompt": "mailbox with letters"},
        {"topic": "Trends we're watching", "description": "Five trends with implications.", "imagePrompt": "trend lines over a city skyline"},
        {"topic": "Behind the build", "description": "How a feature went from idea to launch.", "imagePrompt": "team collaboration sketching"},
        {"topic": "Toolkit: templates you can steal", "description": "Downloadable templates with instructions.", "imagePrompt": "template documents spread on a desk"},
        {"topic": "Expert interview", "description": "Interview with a practitioner.", "imagePrompt": "professional portrait"},
        {"topic": "Year in review", "description": "Highlights, lessons and what's next.", "imagePrompt": "year in review collage"},
        {"topic": "Myths holding you back", "description": "Debunk three myths with evidence.", "imagePrompt": "broken chain illustration"},
    ],
}

CONTENT = {
    "twitter": [
        "Most teams don't have a tooling problem.\n\nThey have a clarity problem.\n\nHere's how [Brand Name] fixes it in 3 steps 🧵",
        "We shipped 100 releases this year at [Brand Name].\n\nThe biggest lesson? Small beats perfect.\n\nEvery time.",
        "Hot take: your onboarding is your marketing.\n\nIf users don't get value in 5 minutes, no campaign will save you.",
    ],
    "linkedin": [
        "Six months ago our onboarding took 14 days.\n\nToday it takes 6.\n\nHere's what [Brand Name] changed:\n\n1. We removed every optional step.\n2. We called every new customer on day one.\n3. We measured time-to-value, not sign-ups.\n\nThe result: churn down 22%.\n\nWhat would you cut first?",
        "The hardest lesson I learned at [Brand Name]: a launch that fails quietly teaches nothing.\n\nSo we now publish our post-mortems. Internally and externally.\n\nTransparency is a feature.",
    ],
    "newsletter": [
        "# This month at [Brand Name]\n\nHi there,\n\nThis issue covers three things: what we shipped, what we learned, and one idea you can use this week.\n\n## What we shipped\nA faster onboarding flow that gets you to value in minutes.\n\n## What we learned\nSimplicity wins. Every extra field costs you users.\n\n## Try this\nAudit your signup form and remove one field.\n\nUntil next time,\nThe [Brand Name] team",
    ],
}

IMAGE_BY_KEYWORD = [
    (("chart", "graph", "data"), "https://images.unsplash.com/photo-1551288049-bebda4e38f71?w=800&h=600&fit=crop"),
    (("team", "collaboration"), "https://images.unsplash.com/photo-1522071820081-009f0129c71c?w=800&h=600&fit=crop"),
    (("technology", "ai", "future"), "https://images.unsplash.com/photo-1518709268805-4e9042af2176?w=800&h=600&fit=crop"),
    (("business", "office", "professional"), "https://images.unsplash.com/photo-1460925895917-afdab827c52f?w=800&h=600&fit=crop"),
    (("newsletter", "guide", "education"), "https://images.unsplash.com/photo-1586953208448-b95a79798f07?w=800&h=600&fit=crop"),
]
DEFAULT_IMAGE_URL = "https://images.unsplash.com/photo-1551434678-e076c223a692?w=800&h=600&fit=crop"
