"""Empirical-Bayes ERA 모델 설정 상수."""

# Conventional ERA scale (earned runs per 9 innings)
ERA_SCALE = 9.0

# Outs recorded per inning (IP = IPouts / 3)
OUTS_PER_INNING = 3

# ─── Filters ───

# Minimum first-year IP to include a player in prior estimation
MIN_PRIOR_IP = 20.0

# Minimum career-remainder IP to include a player in evaluation
MIN_CAREER_IP = 5.0

# Seasons from this year onward
START_YEAR = 1945

# ─── Posterior ───

CREDIBLE_LEVEL = 0.95
MEDIAN_PROB = 0.5

# Scale the Gamma prior is fitted on: 'rate' (ER/IP) or 'era' (9 * ER/IP)
FIT_SCALE = 'rate'
FIT_SCALES: frozenset[str] = frozenset({'rate', 'era'})

# ─── Periods ───

PERIOD_FIRST_YEAR = 'first_year'
PERIOD_CAREER = 'career'
PERIODS: frozenset[str] = frozenset({PERIOD_FIRST_YEAR, PERIOD_CAREER})

# ─── Display (illustrative subsets only) ───

SAMPLE_SIZE = 20
SAMPLE_SEEDS = (123, 222)
