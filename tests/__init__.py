from pathlib import Path
import sys

# Make src/dlmm_swap importable when the project is not pip-installed
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))
