"""End-to-end runs of the CLI with only the link step selected."""

import json
import os

from dotstrap.main import build_steps, main, run


def write_config(tmp_path, home):
    p = tmp_path / "bootstrap.yaml"
    p.write_text(f"paths:\n  home: {home}\n", encoding="utf-8")
    return p


def test_step_ids_are_ordered():
    assert [s.step_id for s in build_steps()] == [
        "10_download_dotfiles",
        "20_install_homebrew",
        "30_link_dotfiles",
        "40_git_identity",
        "50_ssh_key",
        "60_vscode_extensions",
    ]


def test_run_link_step_only(tmp_path, home, dotfiles):
    log = tmp_path / "logs" / "setup.log"

    report = run(
        config_path=str(write_config(tmp_path, home)),
        log_path=str(log),
        start_at="30_link_dotfiles",
        stop_after="30_link_dotfiles",
    )

    assert report.ok
    assert [o.step_id for o in report.outcomes] == ["30_link_dotfiles"]
    assert os.readlink(home / ".zshrc") == str(dotfiles / "configs" / ".zshrc")
    text = log.read_text()
    assert "[INFO] Linking" in text
    assert "[SUCCESS] Dotfiles linked successfully." in text


def test_main_writes_report_and_exit_code(tmp_path, home, dotfiles):
    report_path = tmp_path / "report.json"

    code = main(
        [
            "--config", str(write_config(tmp_path, home)),
            "--log", str(tmp_path / "setup.log"),
            "--report", str(report_path),
            "--start-at", "30_link_dotfiles",
            "--stop-after", "30_link_dotfiles",
            "--no-input",
        ]
    )

    assert code == 0
    data = json.loads(report_path.read_text())
    assert data["steps"][0]["details"]["counts"] == {"linked": 2}


def test_main_dry_run_leaves_home_untouched(tmp_path, home, dotfiles):
    before = sorted(p.name for p in home.iterdir())

    code = main(
        [
            "--config", str(write_config(tmp_path, home)),
            "--log", str(tmp_path / "setup.log"),
            "--start-at", "30_link_dotfiles",
            "--stop-after", "30_link_dotfiles",
            "--dry-run",
            "--no-input",
        ]
    )

    assert code == 0
    assert sorted(p.name for p in home.iterdir()) == before
