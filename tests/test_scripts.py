import os
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = REPO_ROOT / "src"


def _env_with_src() -> dict[str, str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_PATH)
    return env


def test_train_xor_script_reports_stats() -> None:
    cmd = [sys.executable, "scripts/train_xor.py", "--epochs", "200", "--hidden", "4", "--log-level", "WARNING"]
    result = subprocess.run(cmd, cwd=REPO_ROOT, env=_env_with_src(), capture_output=True, text=True, check=True)
    assert "'epochs_run': 200" in result.stdout
    assert "accuracy" in result.stdout


def test_train_xor_script_with_early_stopping() -> None:
    cmd = [
        sys.executable,
        "scripts/train_xor.py",
        "--epochs",
        "300",
        "--early-stopping",
        "--validation-interval",
        "50",
        "--log-level",
        "WARNING",
    ]
    result = subprocess.run(cmd, cwd=REPO_ROOT, env=_env_with_src(), capture_output=True, text=True, check=True)
    assert "stopped_early" in result.stdout


def test_train_xor_script_defaults_learn_xor() -> None:
    cmd = [sys.executable, "scripts/train_xor.py", "--log-level", "WARNING"]
    result = subprocess.run(cmd, cwd=REPO_ROOT, env=_env_with_src(), capture_output=True, text=True, check=True)
    assert "'accuracy': 1.0" in result.stdout
