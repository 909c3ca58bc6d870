"""
コマンドラインインターフェース

Daily Note Moverのメインエントリーポイントです。
argparseのサブコマンド機能を使用して、archive、relocate、config、check-formatコマンドを提供します。
"""

import argparse
import sys
from datetime import date, datetime
from pathlib import Path

from .config import DEFAULT_TARGET_FOLDER, LEGACY_FOLDER
from .date_format import DEFAULT_DATE_FORMAT, DateFormatValidator, compile_date_format
from .exceptions import ProcessingError, ValidationError
from .note_manager import NoteManager
from .vault import Vault


def parse_today(value: str) -> date:
    """--today オプションの値（YYYY-MM-DD）を日付に変換"""
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"日付は YYYY-MM-DD 形式で指定してください: {value}")


def create_parser() -> argparse.ArgumentParser:
    """
    コマンドライン引数パーサーを作成

    Returns:
        設定済みのArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='daily-note-mover',
        description='ファイル名の日付をもとに古いデイリーノートをアーカイブフォルダへ移動するツール',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用例:
  # Vault全体をスキャンして古いデイリーノートをアーカイブ
  daily-note-mover archive /path/to/vault

  # 旧アーカイブフォルダのノートを現在の移動先へ再配置
  daily-note-mover relocate /path/to/vault

  # 設定を表示・変更
  daily-note-mover config /path/to/vault --date-format YYYY-MM-DD --subfolders

  # 日付フォーマットを確認
  daily-note-mover check-format DDMMMYYYY

詳細については各サブコマンドのヘルプを参照してください:
  daily-note-mover <command> --help
        """
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='利用可能なコマンド',
        metavar='<command>'
    )

    # archiveコマンド（エイリアス: a）
    archive_parser = subparsers.add_parser(
        'archive',
        aliases=['a'],
        help='古いデイリーノートをアーカイブ',
        description='Vault内のすべてのファイルをスキャンし、今日以外の日付のデイリーノートを移動先フォルダへ移動します。',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用例:
  # 基本的な使用方法
  daily-note-mover archive /path/to/vault

  # 基準日を指定（この日付のノートは移動しない）
  daily-note-mover archive /path/to/vault --today 2024-01-31

  # 詳細ログを表示
  daily-note-mover archive /path/to/vault --verbose
        """
    )
    _add_operation_arguments(archive_parser)

    # relocateコマンド（エイリアス: r）
    relocate_parser = subparsers.add_parser(
        'relocate',
        aliases=['r'],
        help=f"'{LEGACY_FOLDER}' 内のノートを移動先へ再配置",
        description=f"'{LEGACY_FOLDER}' フォルダ内のデイリーノートを、現在設定されている移動先フォルダへ再配置します。",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用例:
  # 基本的な使用方法
  daily-note-mover relocate /path/to/vault

  # 詳細ログを表示
  daily-note-mover relocate /path/to/vault --verbose
        """
    )
    _add_operation_arguments(relocate_parser)

    # configコマンド（エイリアス: c）
    config_parser = subparsers.add_parser(
        'config',
        aliases=['c'],
        help='設定を表示・変更',
        description='Vaultの設定を表示します。オプションを指定した場合は設定を変更して保存します。',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
使用例:
  # 現在の設定を表示
  daily-note-mover config /path/to/vault

  # 移動先フォルダと日付フォーマットを変更
  daily-note-mover config /path/to/vault --target-folder Archive --date-format YYYY-MM-DD

  # 年/月のサブフォルダを使用
  daily-note-mover config /path/to/vault --subfolders

使用できる日付トークン: DD, MM, YYYY, YY, MMM, MMMM
無効な日付フォーマットは {DEFAULT_DATE_FORMAT} に置き換えられます。
        """
    )
    config_parser.add_argument(
        'vault',
        type=str,
        help='Vaultのディレクトリパス'
    )
    config_parser.add_argument(
        '--target-folder', '-t',
        type=str,
        help=f"古いデイリーノートの移動先フォルダ（空の場合は '{DEFAULT_TARGET_FOLDER}'）"
    )
    config_parser.add_argument(
        '--date-format', '-d',
        type=str,
        help='ノートのファイル名の日付フォーマット（例: DD-MM-YYYY, YYYY-MM-DD, DDMMMYYYY）'
    )
    summary_group = config_parser.add_mutually_exclusive_group()
    summary_group.add_argument(
        '--summary',
        dest='show_summary_notification',
        action='store_const',
        const=True,
        help='アーカイブ後にサマリーを通知する'
    )
    summary_group.add_argument(
        '--no-summary',
        dest='show_summary_notification',
        action='store_const',
        const=False,
        help='アーカイブ後にサマリーを通知しない'
    )
    subfolder_group = config_parser.add_mutually_exclusive_group()
    subfolder_group.add_argument(
        '--subfolders',
        dest='use_year_month_subfolders',
        action='store_const',
        const=True,
        help='年/月のサブフォルダに分けて移動する（例: 移動先/2020/12/note.md）'
    )
    subfolder_group.add_argument(
        '--no-subfolders',
        dest='use_year_month_subfolders',
        action='store_const',
        const=False,
        help='移動先フォルダの直下に移動する'
    )

    # check-formatコマンド（エイリアス: f）
    format_parser = subparsers.add_parser(
        'check-format',
        aliases=['f'],
        help='日付フォーマットを検証',
        description='日付フォーマットを検証し、生成される正規表現とフィールドの並びを表示します。',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用例:
  daily-note-mover check-format DD-MM-YYYY
  daily-note-mover check-format DDMMMYYYY
        """
    )
    format_parser.add_argument(
        'date_format',
        type=str,
        help='検証する日付フォーマット'
    )

    return parser


def _add_operation_arguments(parser: argparse.ArgumentParser) -> None:
    """archive/relocateコマンド共通の引数を追加"""
    parser.add_argument(
        'vault',
        type=str,
        help='Vaultのディレクトリパス'
    )
    parser.add_argument(
        '--today',
        type=parse_today,
        help='基準日（YYYY-MM-DD、省略時はシステム日付）'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='詳細ログを表示'
    )


def handle_archive_command(args) -> int:
    """
    archiveコマンドを処理

    Args:
        args: 解析されたコマンドライン引数

    Returns:
        終了コード（0: 成功、1: エラー）
    """
    try:
        vault_path = Path(args.vault)
        Vault(vault_path).validate_root()

        note_manager = NoteManager(vault_path)
        result = note_manager.archive_old_notes(today=args.today, verbose=args.verbose)

        return 0 if result is not None else 1

    except ValidationError as e:
        print(f"❌ 入力エラー: {e}", file=sys.stderr)
        return 1
    except ProcessingError as e:
        print(f"❌ 処理エラー: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"❌ 予期しないエラー: {e}", file=sys.stderr)
        return 1


def handle_relocate_command(args) -> int:
    """
    relocateコマンドを処理

    Args:
        args: 解析されたコマンドライン引数

    Returns:
        終了コード（0: 成功、1: エラー）
    """
    try:
        vault_path = Path(args.vault)
        Vault(vault_path).validate_root()

        note_manager = NoteManager(vault_path)
        result = note_manager.relocate_legacy_notes(today=args.today, verbose=args.verbose)

        return 0 if result is not None else 1

    except ValidationError as e:
        print(f"❌ 入力エラー: {e}", file=sys.stderr)
        return 1
    except ProcessingError as e:
        print(f"❌ 処理エラー: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"❌ 予期しないエラー: {e}", file=sys.stderr)
        return 1


def handle_config_command(args) -> int:
    """
    configコマンドを処理

    Args:
        args: 解析されたコマンドライン引数

    Returns:
        終了コード（0: 成功、1: エラー）
    """
    try:
        vault_path = Path(args.vault)
        Vault(vault_path).validate_root()

        note_manager = NoteManager(vault_path)
        config = note_manager.config_store.load().validated()

        changes = {}
        if args.target_folder is not None:
            changes['target_folder'] = args.target_folder or DEFAULT_TARGET_FOLDER
        if args.date_format is not None:
            date_format = args.date_format or DEFAULT_DATE_FORMAT
            if not DateFormatValidator.is_valid(date_format):
                print(f"⚠️  無効な日付フォーマットのため {DEFAULT_DATE_FORMAT} を使用します: {date_format}")
            changes['date_format'] = date_format
        if args.show_summary_notification is not None:
            changes['show_summary_notification'] = args.show_summary_notification
        if args.use_year_month_subfolders is not None:
            changes['use_year_month_subfolders'] = args.use_year_month_subfolders

        if changes:
            config = note_manager.save_configuration(config.updated(**changes))
            print(f"✅ 設定を保存しました: {note_manager.config_store.config_path}")

        print(f"移動先フォルダ: {config.target_folder}")
        print(f"日付フォーマット: {config.date_format}")
        print(f"サマリー通知: {'有効' if config.show_summary_notification else '無効'}")
        print(f"年/月サブフォルダ: {'有効' if config.use_year_month_subfolders else '無効'}")

        return 0

    except ValidationError as e:
        print(f"❌ 入力エラー: {e}", file=sys.stderr)
        return 1
    except ProcessingError as e:
        print(f"❌ 処理エラー: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"❌ 予期しないエラー: {e}", file=sys.stderr)
        return 1


def handle_check_format_command(args) -> int:
    """
    check-formatコマンドを処理

    Args:
        args: 解析されたコマンドライン引数

    Returns:
        終了コード（0: 有効、1: 無効）
    """
    problems = DateFormatValidator.validate(args.date_format)
    valid = DateFormatValidator.is_valid(args.date_format)

    for problem in problems:
        print(f"⚠️  {problem}")

    if not valid:
        print(f"❌ 無効な日付フォーマットです。{DEFAULT_DATE_FORMAT} が使用されます。")
        return 1

    compiled = compile_date_format(args.date_format)
    print(f"✅ 有効な日付フォーマット: {compiled.date_format}")
    print(f"正規表現: {compiled.match_pattern}")
    print(f"フィールド: {', '.join(f'{token}({field_type})' for token, field_type in compiled.fields)}")
    print(f"区切り文字: {compiled.separator or 'なし'}")
    return 0


def main() -> int:
    """
    メインエントリーポイント

    Returns:
        終了コード（0: 成功、1: エラー）
    """
    parser = create_parser()

    # 引数が指定されていない場合はヘルプを表示
    if len(sys.argv) == 1:
        parser.print_help()
        return 0

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    if args.command in ['archive', 'a']:
        return handle_archive_command(args)
    elif args.command in ['relocate', 'r']:
        return handle_relocate_command(args)
    elif args.command in ['config', 'c']:
        return handle_config_command(args)
    elif args.command in ['check-format', 'f']:
        return handle_check_format_command(args)
    else:
        print(f"❌ 不明なコマンド: {args.command}", file=sys.stderr)
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
