import shutil
from riskmap.models.assessment import AssessmentRequest
from riskmap.reference.loader import load_reference_data
from riskmap.scoring.classification import country_risk_band
from riskmap.scoring.engine import compute_risk
from riskmap.scoring.presets import get_preset

# --- AUDIT-STYLE UI THEME ---
class Colors:
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'

    HEADER = '\033[1m'
    MUTED = '\033[90m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'

    BORDER = MUTED
    LABEL = ENDC
    VALUE = BOLD

BAND_COLORS = {
    "low-risk": Colors.OKGREEN,
    "medium-risk": Colors.WARNING,
    "high-risk": Colors.FAIL,
    "very-high-risk": Colors.FAIL + Colors.BOLD,
}

def print_separator(char="-"):
    width = shutil.get_terminal_size().columns
    print(Colors.BORDER + (char * width) + Colors.ENDC)

def print_section(title):
    print("\n")
    print_separator("=")
    print(f"  {Colors.HEADER}{title.upper()}{Colors.ENDC}")
    print_separator("=")

def print_kv(key, value, color=Colors.VALUE):
    print(f"{Colors.LABEL}{key:<25}{Colors.ENDC} : {color}{value}{Colors.ENDC}")

# --- MAIN DEMO ---
def run_demo():
    reference = load_reference_data()

    # 1. SETUP
    print_section("Scenario Initialization")

    industry = "Textiles"
    volumes = {"Bangladesh": 60, "Vietnam": 25, "Turkey": 15}
    coverage = get_preset("aggressive")

    print_kv("Reference Snapshot", reference.snapshot_version)
    print_kv("Industry", industry)
    print_kv("Countries", ", ".join(volumes))
    print_kv("Strategy Preset", "aggressive")

    request = AssessmentRequest(
        industry=industry,
        countries=list(volumes),
        strategy_coverage=coverage,
        activity_volumes=volumes,
    )
    result = compute_risk(request, reference)

    # 2. HRDD
    print_section("Step 1: HRDD Multiplier")
    print_kv("Weighted Effectiveness", f"{result.hrdd.weighted_effectiveness_pct}%")
    print_kv("Coverage Quality", result.hrdd.coverage_quality)
    print_kv("Dominant Strategy", result.hrdd.dominant_strategy.label)
    print_kv("HRDD Multiplier", f"{result.hrdd_multiplier:.3f}")

    # 3. COUNTRIES
    print_section("Step 2: Country Risk")
    for idx, cr in enumerate(result.country_risks, 1):
        color = BAND_COLORS[country_risk_band(cr.risk)]
        print(f"{idx}. {Colors.BOLD}{cr.country}{Colors.ENDC}")
        print(f"   ├─ Base Risk : {cr.base_risk}")
        print(f"   ├─ Weight    : {cr.weight:.1f}%")
        print(f"   └─ Risk      : {color}{cr.risk}{Colors.ENDC}")

    # 4. VERDICT
    print_section("Step 3: Overall")
    color = BAND_COLORS[country_risk_band(result.overall_risk)]
    print(f"{Colors.BOLD}OVERALL:{Colors.ENDC}  [{color}{result.overall_risk} - {result.risk_level}{Colors.ENDC}]")

    print_separator("=")
    print("\n")

if __name__ == "__main__":
    run_demo()
