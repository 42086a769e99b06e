"""
Blood pressure classification.

Two threshold tables are supported: the general adult table and a stricter
pregnancy table. The values below are user-facing clinical guidance and are
returned unchanged by the guidelines endpoint.
"""

GENERAL = 'general'
PREGNANCY = 'pregnancy'
RULESETS = (GENERAL, PREGNANCY)

NORMAL = 'normal'
ELEVATED = 'elevated'
STAGE1 = 'stage1'
STAGE2 = 'stage2'
CRISIS = 'crisis'
CATEGORIES = (NORMAL, ELEVATED, STAGE1, STAGE2, CRISIS)

HIGH_RISK_CATEGORIES = (STAGE2, CRISIS)

# Per tier: (systolic cutoff, diastolic cutoff). crisis/stage2/stage1 trip on
# either value; elevated needs systolic >= cutoff AND diastolic < cutoff.
THRESHOLDS = {
    GENERAL: {
        CRISIS: {'systolic': 180, 'diastolic': 120},
        STAGE2: {'systolic': 140, 'diastolic': 90},
        STAGE1: {'systolic': 130, 'diastolic': 80},
        ELEVATED: {'systolic': 120, 'diastolic': 80},
    },
    PREGNANCY: {
        CRISIS: {'systolic': 160, 'diastolic': 110},
        STAGE2: {'systolic': 140, 'diastolic': 90},
        STAGE1: {'systolic': 130, 'diastolic': 85},
        ELEVATED: {'systolic': 120, 'diastolic': 85},
    },
}

# Inclusive (min, max) accepted at submission time.
VITAL_RANGES = {
    GENERAL: {
        'systolic': (70, 250),
        'diastolic': (40, 150),
        'pulse': (40, 200),
    },
    PREGNANCY: {
        'systolic': (80, 220),
        'diastolic': (50, 140),
        'pulse': (50, 150),
    },
}

CATEGORY_LABELS = {
    GENERAL: {
        NORMAL: 'Normal',
        ELEVATED: 'Elevated',
        STAGE1: 'Stage 1 High',
        STAGE2: 'Stage 2 High',
        CRISIS: 'Crisis',
    },
    PREGNANCY: {
        NORMAL: 'Normal',
        ELEVATED: 'Watch Zone',
        STAGE1: 'Gestational HTN Risk',
        STAGE2: 'Gestational HTN',
        CRISIS: 'Severe - Call Doctor',
    },
}

ADVISORIES = {
    CRISIS: {
        'level': 'urgent',
        'message': ('Your blood pressure reading is very high. Contact your healthcare '
                    'provider immediately or seek emergency care.'),
    },
    STAGE2: {
        'level': 'important',
        'message': ('This reading indicates gestational hypertension. Please contact '
                    'your healthcare provider soon.'),
    },
}


def check_ruleset(ruleset: str) -> str:
    if ruleset not in RULESETS:
        raise ValueError(f'Unknown ruleset: {ruleset!r}')
    return ruleset


def classify(systolic: int, diastolic: int, ruleset: str = PREGNANCY) -> str:
    """Classify a reading. First matching tier wins, most severe first."""
    table = THRESHOLDS[check_ruleset(ruleset)]

    for tier in (CRISIS, STAGE2, STAGE1):
        cutoff = table[tier]
        if systolic >= cutoff['systolic'] or diastolic >= cutoff['diastolic']:
            return tier

    cutoff = table[ELEVATED]
    if systolic >= cutoff['systolic'] and diastolic < cutoff['diastolic']:
        return ELEVATED
    return NORMAL


def category_label(category: str, ruleset: str = PREGNANCY) -> str:
    return CATEGORY_LABELS[check_ruleset(ruleset)].get(category, 'Unknown')


def advisory_for(category: str):
    """Message to show right after a reading is logged, or None."""
    return ADVISORIES.get(category)


def is_high_risk(category: str) -> bool:
    return category in HIGH_RISK_CATEGORIES
