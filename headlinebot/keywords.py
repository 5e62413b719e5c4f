# --- Default feeds ---
RSS_FEEDS = (
    "https://jacobin.com/feed",
    "https://www.dsausa.org/feed/",
    "https://www.thenation.com/feed/?post_type=article",
    "https://inthesetimes.com/rss/articles",
    "https://www.commondreams.org/rss-feed",
    "https://truthout.org/feed/",
    "https://progressive.org/feed/",
    "https://theintercept.com/feed/",
    "https://www.theguardian.com/us-news/us-politics/rss",
    "https://www.truthdig.com/feed/",
    "https://www.counterpunch.org/feed/",
    "https://www.democracynow.org/democracynow.rss",
    "https://therealnews.com/feed/",
    "https://labornotes.org/rss.xml",
    "https://shadowproof.com/feed/",
    "https://popularresistance.org/feed/",
    "https://wagingnonviolence.org/feed/",
    "https://www.leftvoice.org/feed/",
)

# --- Topic keywords (a headline must mention one of these) ---
POSITIVE_KEYWORDS = (
    "win", "victory", "gains", "success", "growth", "solidarity", "organize",
    "strike", "socialist", "left wing", "union", "responsibility", "mobilize",
    "charity", "outreach", "resistance", "community", "truth", "celebrate",
    "local", "save", "future", "healing", "hope", "love", "progressive",
    "champion", "leader", "ceasefire",
)

# Each hit costs NEGATIVE_PENALTY points of sentiment
NEGATIVE_KEYWORDS = (
    "death", "deadly", "killed", "kill", "killing", "violence", "attack",
    "crisis", "disaster", "scandal", "accident", "injured", "tragedy", "fraud",
    "collapse", "bomb", "shooting", "war", "loser", "awful", "horrible",
    "terrible", "tragic", "destroy", "raiding", "raid", "gut", "fear",
    "broken", "destruction",
)

# --- Topic buckets, one news API query per group ---
KEYWORD_GROUPS = {
    "social": (
        "progressive", "socialism", "socialist", "left wing", "left-wing",
        "leftist", "social justice", "equity", "fair wages", "income inequality",
        "wealth inequality", "wealth tax", "corporate accountability",
        "corporate greed", "billionaire tax", "tax the rich",
        "economic democracy", "economic justice", "public ownership",
        "public investment",
    ),
    "labor": (
        "labor rights", "unionization", "union", "right to strike",
        "collective bargaining", "worker rights", "workers' rights",
        "labor movement", "gig economy", "living wage", "minimum wage",
        "tenant union", "tenant rights", "good cause eviction", "rent control",
    ),
    "housing": (
        "affordable housing", "housing affordability", "housing justice",
        "housing for all", "public housing", "social housing",
        "cancel student debt", "student debt", "tuition free college",
        "public education", "universal pre-k",
    ),
    "environment": (
        "climate justice", "environmental justice", "climate action",
        "green new deal", "green jobs", "climate jobs", "renewable energy",
        "green infrastructure", "decarbonization", "zero emissions",
        "green transition", "youth climate movement",
    ),
    "civil_rights": (
        "black lives matter", "lgbtq rights", "trans rights", "gender equality",
        "civil rights", "gender pay gap", "racial justice", "racial equity",
        "racial wealth gap", "prison reform", "mass incarceration",
        "police accountability", "immigrant rights", "sanctuary cities",
        "reproductive rights",
    ),
    "public_services": (
        "public transit", "public transportation", "public option",
        "healthcare access", "universal healthcare", "medicare for all",
        "medicare", "medicaid", "public broadband", "childcare",
        "universal childcare", "paid family leave", "paid sick leave",
    ),
    "personalities": (
        "bernie sanders", "aoc", "alexandria ocasio-cortez", "zohran mamdani",
        "mamdani",
    ),
}

# --- Generic polarity lexicon for the default scorer ---
POLARITY_POSITIVE = (
    "win", "wins", "won", "victory", "success", "succeed", "gain", "growth",
    "improve", "boost", "celebrate", "hope", "love", "help", "protect",
    "save", "support", "approve", "secure", "historic", "breakthrough",
    "achieve", "thrive", "heal", "benefit", "free", "fair", "good", "great",
    "best", "joy", "proud", "unite", "rise", "restore", "expand", "raise",
)

POLARITY_NEGATIVE = (
    "lose", "loss", "lost", "fail", "defeat", "cut", "ban", "block", "threat",
    "warn", "fear", "anger", "angry", "worst", "bad", "poor", "hate",
    "decline", "drop", "fall", "slump", "struggle", "suffer", "harm",
    "hurt", "deny", "reject", "sue", "arrest", "crash", "dead", "die",
)
