#!/usr/bin/env python3
"""
Daily Note Mover - 基本的な使用例

このスクリプトは、Daily Note Moverの基本的な使用方法を示します。
プログラムから直接ツールの機能を呼び出す例を提供します。
"""

from datetime import date
from pathlib import Path

from daily_note_mover import (
    Archiver, Configuration, DateFormatValidator, NoteManager, Notifier, Vault,
    compile_date_format,
)


def example_basic_workflow():
    """基本的なワークフローの例"""
    print("=" * 60)
    print("Daily Note Mover - 基本的な使用例")
    print("=" * 60)

    # 例用のディレクトリパス（実際の使用時は適切なパスに変更してください）
    vault_directory = Path("~/Notes/Vault").expanduser()

    print(f"Vault: {vault_directory}")
    print()

    if not vault_directory.exists():
        print(f"⚠️  Vaultが存在しません: {vault_directory}")
        print("実際のディレクトリパスに変更してください。")
        return

    # ステップ1: 設定の保存
    print("ステップ1: 設定の保存")
    print("-" * 40)

    note_manager = NoteManager(vault_directory)
    config = note_manager.save_configuration(Configuration(
        target_folder='Archive/Daily',
        date_format='YYYY-MM-DD',
        use_year_month_subfolders=True
    ))
    print(f"設定: {config}")
    print()

    # ステップ2: 古いデイリーノートのアーカイブ
    print("ステップ2: 古いデイリーノートのアーカイブ")
    print("-" * 40)

    result = note_manager.archive_old_notes(verbose=True)
    if result is None:
        print("❌ アーカイブ処理が中断されました")
        return

    print()
    print(f"✅ 処理が完了しました！ 移動: {result.moved}件")


def example_dry_run_plan():
    """ファイルを移動せずに移動先だけを確認する例"""
    print("=" * 60)
    print("Daily Note Mover - 移動先の確認")
    print("=" * 60)

    vault_directory = Path("~/Notes/Vault").expanduser()
    if not vault_directory.exists():
        print(f"⚠️  Vaultが存在しません: {vault_directory}")
        return

    date_format = 'DDMMMYYYY'
    for problem in DateFormatValidator.validate(date_format):
        print(f"⚠️  {problem}")

    config = Configuration(target_folder='Archive', date_format=date_format).validated()
    compiled = compile_date_format(config.date_format)
    vault = Vault(vault_directory)
    archiver = Archiver(vault, Notifier())

    for decision in archiver.plan_files(vault.list_all_files(), config, compiled, date.today()):
        if decision.should_move:
            print(f"  {decision.file.path} -> {decision.destination_path}")
        else:
            print(f"  {decision.file.path} (スキップ: {decision.skip_reason})")


def main():
    """メイン関数"""
    print("Daily Note Mover - 使用例")
    print()
    print("実行する例を選択してください:")
    print("1. 基本的なワークフロー")
    print("2. 移動先の確認")
    print("0. 終了")
    print()

    while True:
        try:
            choice = input("選択 (0-2): ").strip()

            if choice == '0':
                print("終了します。")
                break
            elif choice == '1':
                example_basic_workflow()
            elif choice == '2':
                example_dry_run_plan()
            else:
                print("無効な選択です。0-2の数字を入力してください。")
                continue

            print()
            if input("他の例を実行しますか？ (y/N): ").lower() != 'y':
                break
            print()

        except KeyboardInterrupt:
            print("\n\n処理が中断されました。")
            break
        except Exception as e:
            print(f"❌ 予期しないエラー: {e}")
            break


if __name__ == '__main__':
    main()
