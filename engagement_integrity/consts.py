from typing import Final

# Scores are rounded to this many decimals so threshold comparisons are exact
SCORE_PRECISION = 3

# Content relevance
RELEVANCE_TRIGGERS = ["comment", "quote", "reply", "retweet", "analysis", "discuss", "engage"]
GENERIC_PHRASES = ["great post", "nice", "cool", "awesome", "gm", "gn", "love it"]
HIGH_OVERLAP_THRESHOLD = 0.5
MODERATE_OVERLAP_THRESHOLD = 0.25
TOPIC_MATCH_BONUS = 0.1
GENERIC_PHRASE_PENALTY = 0.1

# Spam score
SPAM_TRIGGERS = [
    "engage",
    "raid",
    "tweet",
    "retweet",
    "comment",
    "quote",
    "like",
    "follow",
    "giveaway",
    "promo",
    "check out",
    "click here",
]
SPAM_PATTERNS: Final[dict[str, float]] = {
    "follow me": 0.25,
    "buy now": 0.30,
    "click here": 0.25,
    "free": 0.20,
    "promo": 0.20,
    "giveaway": 0.20,
}
EXCLAMATION_MIN_COUNT = 3
EXCLAMATION_WEIGHT = 0.15
MULTIPLE_LINKS_MIN_COUNT = 2
MULTIPLE_LINKS_WEIGHT = 0.15
CAPS_RATIO_THRESHOLD = 0.4
CAPS_MIN_LENGTH = 12
CAPS_WEIGHT = 0.20
SPAM_THRESHOLD = 0.7

# Engagement fraud
FRAUD_TEXT_TRIGGERS = ["engage", "raid", "tweet"]
HIGH_VALUE_ACTIONS = ["verify", "quote", "comment"]
FLAGGED_PATTERNS = ["rapid_fire", "bot_like_behavior"]
NO_EVIDENCE_WEIGHT = 0.3
SUSPICIOUS_PATTERNS_WEIGHT = 0.3
BURST_WINDOW_SECONDS = 10
BURST_MIN_COUNT = 5
BURST_WEIGHT = 0.3
IDENTICAL_ACTIONS_MIN_COUNT = 5
IDENTICAL_ACTIONS_RATIO = 0.8
IDENTICAL_ACTIONS_WEIGHT = 0.1
REPEATED_TEXT_MIN_COUNT = 3
REPEATED_TEXT_WEIGHT = 0.2
SAME_TIMESTAMP_MIN_COUNT = 5
SAME_TIMESTAMP_WEIGHT = 0.25
FRAUD_THRESHOLD = 0.6

# Participation consistency
CONSISTENCY_TRIGGERS = ["raid", "engage"]
NEUTRAL_CONSISTENCY_SCORE = 0.5
HIGH_VARIANCE_CV = 0.8
RAPID_SEQUENCE_SECONDS = 5
SESSION_HOPPING_MIN_GROUPS = 3
SESSION_HOPPING_MAX_ENTRIES_PER_GROUP = 2
SESSION_HOPPING_PENALTY = 0.15

# Engagement quality
QUALITY_TRIGGERS = ["engag", "raid", "tweet", "like", "retweet", "comment", "quote"]
QUALITY_BASELINE = 0.5
DETAILED_CONTENT_LENGTH = 100
DETAILED_CONTENT_BONUS = 0.2
BRIEF_CONTENT_LENGTH = 20
BRIEF_CONTENT_PENALTY = 0.1
QUALITY_WORDS = [
    "because",
    "however",
    "therefore",
    "although",
    "moreover",
    "furthermore",
    "specifically",
    "particularly",
    "detailed",
    "explanation",
    "example",
    "solution",
    "approach",
    "insightful",
    "thoughtful",
    "comprehensive",
    "analysis",
    "perspective",
]
QUALITY_WORD_BONUS = 0.1
QUALITY_WORD_MAX_BONUS = 0.3
# Precedence order matters: earlier entries win ties
ENGAGEMENT_TYPE_VALUES: Final[dict[str, float]] = {
    "comment": 0.4,
    "quote": 0.3,
    "share": 0.2,
    "retweet": 0.2,
    "like": 0.1,
}
COMMUNITY_WORDS = ["community", "together", "us", "we", "team", "help", "support"]
COMMUNITY_BONUS = 0.15
QUALITY_SPAM_PHRASES = ["follow me", "check out", "buy now", "click here", "100%", "!!!"]
QUALITY_SPAM_PENALTY = 0.3
EMOTIONAL_WORDS = ["feel", "think", "believe", "appreciate", "understand", "respect"]
EMOTIONAL_BONUS = 0.1
BONUS_ELIGIBLE_THRESHOLD = 0.7

# Decision policy
NEUTRAL_TRUST_SCORE = 0.5
DEFAULT_FUSION_WEIGHTS: Final[dict[str, float]] = {
    "relevance": 0.25,
    "spam": 0.25,
    "consistency": 0.20,
    "quality": 0.30,
}
# Environment variable overrides for fusion weights
FUSION_WEIGHT_ENV_VARS: Final[dict[str, str]] = {
    "relevance": "EIP_WEIGHT_RELEVANCE",
    "spam": "EIP_WEIGHT_SPAM",
    "consistency": "EIP_WEIGHT_CONSISTENCY",
    "quality": "EIP_WEIGHT_QUALITY",
}

# Raid points per action
DEFAULT_ENGAGEMENT_POINTS: Final[dict[str, int]] = {
    "like": 1,
    "retweet": 2,
    "quote": 3,
    "comment": 5,
    "share": 2,
}
DEFAULT_ACTION_POINTS = 1

# User-visible messages
REJECT_MESSAGE = "Engagement not accepted."
FLAG_MESSAGE = "Your engagement has been received and is pending review."
ADMIT_MESSAGE = "Engagement accepted."
