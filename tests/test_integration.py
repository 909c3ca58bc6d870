"""
統合テスト

エンドツーエンドの処理フローをテストします。
一時的なVaultを使用して、archive、relocate、config、check-formatの
各コマンドが正しく動作することを確認します。
"""

import json
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from daily_note_mover.cli import create_parser, main


def run_cli(*args: str) -> int:
    """コマンドライン引数を指定してmainを実行"""
    with patch.object(sys, 'argv', ['daily-note-mover', *args]):
        return main()


class TestIntegration:
    """統合テストクラス"""

    @pytest.fixture
    def vault_dir(self, tmp_path: Path) -> Path:
        """デイリーノートを含む一時的なVaultを作成"""
        notes = [
            "15-07-2019.md",
            "Daily/01-02-2020.md",
            "Daily/15-03-2024.md",
            "Daily/31-04-2021.md",
            "Old Daily Notes/10-10-2010.md",
            "Projects/plan.md",
        ]
        for note in notes:
            path = tmp_path / note
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(f"# {note}", encoding='utf-8')
        return tmp_path

    def test_archive_command_flat(self, vault_dir: Path):
        """archiveコマンドでアーカイブフォルダ直下に移動"""
        assert run_cli('config', str(vault_dir), '--target-folder', 'Archive') == 0

        assert run_cli('archive', str(vault_dir), '--today', '2024-03-15') == 0

        assert (vault_dir / 'Archive' / '15-07-2019.md').exists()
        assert (vault_dir / 'Archive' / '01-02-2020.md').exists()
        assert (vault_dir / 'Archive' / '10-10-2010.md').exists()
        # 今日のノートと解析できないノートは残る
        assert (vault_dir / 'Daily' / '15-03-2024.md').exists()
        assert (vault_dir / 'Daily' / '31-04-2021.md').exists()
        assert (vault_dir / 'Projects' / 'plan.md').exists()

    def test_archive_command_year_month(self, vault_dir: Path):
        """archiveコマンドで年/月のサブフォルダに移動"""
        assert run_cli('config', str(vault_dir), '--target-folder', 'Archive', '--subfolders') == 0

        assert run_cli('a', str(vault_dir), '--today', '2024-03-15') == 0

        assert (vault_dir / 'Archive' / '2019' / '07' / '15-07-2019.md').exists()
        assert (vault_dir / 'Archive' / '2020' / '02' / '01-02-2020.md').exists()
        assert (vault_dir / 'Archive' / '2010' / '10' / '10-10-2010.md').exists()

    def test_archive_twice_is_idempotent(self, vault_dir: Path):
        """2回目のarchiveでは何も移動しない"""
        run_cli('config', str(vault_dir), '--target-folder', 'Archive')
        run_cli('archive', str(vault_dir), '--today', '2024-03-15')
        before = sorted(p.relative_to(vault_dir) for p in vault_dir.rglob('*.md'))

        assert run_cli('archive', str(vault_dir), '--today', '2024-03-15') == 0

        after = sorted(p.relative_to(vault_dir) for p in vault_dir.rglob('*.md'))
        assert before == after

    def test_relocate_command(self, vault_dir: Path):
        """relocateコマンドは旧アーカイブフォルダ内のノートのみ移動"""
        run_cli('config', str(vault_dir), '--target-folder', 'Archive')

        assert run_cli('relocate', str(vault_dir), '--today', '2024-03-15') == 0

        assert (vault_dir / 'Archive' / '10-10-2010.md').exists()
        assert not (vault_dir / 'Old Daily Notes' / '10-10-2010.md').exists()
        assert (vault_dir / '15-07-2019.md').exists()

    def test_config_command_shows_and_saves(self, vault_dir: Path, capsys):
        """configコマンドで設定を表示・保存"""
        assert run_cli('config', str(vault_dir)) == 0
        output = capsys.readouterr().out
        assert '移動先フォルダ: Old Daily Notes' in output
        assert '日付フォーマット: DD-MM-YYYY' in output

        assert run_cli('c', str(vault_dir), '--date-format', 'YYYY-MM-DD', '--no-summary') == 0
        data = json.loads((vault_dir / '.daily_note_mover' / 'data.json').read_text(encoding='utf-8'))
        assert data['date_format'] == 'YYYY-MM-DD'
        assert data['show_summary_notification'] is False

    def test_config_invalid_format_falls_back(self, vault_dir: Path, capsys):
        """無効な日付フォーマットはデフォルトに置き換えられる"""
        assert run_cli('config', str(vault_dir), '--date-format', 'DD-MM/YYYY') == 0

        output = capsys.readouterr().out
        assert '無効な日付フォーマット' in output
        data = json.loads((vault_dir / '.daily_note_mover' / 'data.json').read_text(encoding='utf-8'))
        assert data['date_format'] == 'DD-MM-YYYY'

    def test_check_format_command(self, capsys):
        """check-formatコマンドで正規表現を表示"""
        assert run_cli('check-format', 'DDMMMYYYY') == 0
        output = capsys.readouterr().out
        assert r'^(\d{2})([A-Za-z]{3})(\d{4})\.md$' in output

        assert run_cli('f', 'notes') == 1
        output = capsys.readouterr().out
        assert '使用可能なトークンが含まれていません' in output

    def test_missing_vault(self, tmp_path: Path, capsys):
        """存在しないVaultは入力エラー"""
        assert run_cli('archive', str(tmp_path / 'missing')) == 1
        assert '入力エラー' in capsys.readouterr().err

    def test_invalid_today_option(self, vault_dir: Path):
        """--today の形式が不正な場合はargparseのエラー"""
        with pytest.raises(SystemExit):
            run_cli('archive', str(vault_dir), '--today', '15-03-2024')

    def test_no_arguments_prints_help(self, capsys):
        """引数なしの場合はヘルプを表示"""
        with patch.object(sys, 'argv', ['daily-note-mover']):
            assert main() == 0
        assert 'daily-note-mover' in capsys.readouterr().out

    def test_parser_aliases(self):
        """各コマンドのエイリアス"""
        parser = create_parser()

        assert parser.parse_args(['a', 'vault']).command == 'a'
        assert parser.parse_args(['r', 'vault']).command == 'r'
        assert parser.parse_args(['c', 'vault']).command == 'c'
        assert parser.parse_args(['f', 'DD']).command == 'f'
