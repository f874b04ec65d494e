# Severity bands for the overall score.
# Upper bounds are inclusive: a score of exactly 40 is "Low".

VERY_LOW_MAX = 20
LOW_MAX = 40
MEDIUM_MAX = 60
HIGH_MAX = 80

# Interpretation:
# 0  - 20  -> Very Low
# 21 - 40  -> Low
# 41 - 60  -> Medium
# 61 - 80  -> High
# 81+      -> Very High

# HRDD multiplier anchors: 0% effective coverage -> 1.5, 100% -> 0.5
HRDD_MULTIPLIER_MAX = 1.5
HRDD_MULTIPLIER_MIN = 0.5

COVERAGE_TOTAL = 100.0
COVERAGE_TOLERANCE = 0.1

# Coverage quality labels (weighted effectiveness %)
STRONG_COVERAGE_MIN = 60
MODERATE_COVERAGE_MIN = 30
