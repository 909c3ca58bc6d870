"""
ユーザー通知モジュール

ファイルごとの移動結果や処理サマリーをユーザーに通知します。
"""

import logging
from typing import List


class Notifier:
    """ユーザー向けの通知を記録して出力するクラス"""

    def __init__(self):
        """
        Notifierを初期化

        messages は clear() されるまで通知を蓄積します。
        NoteManager は処理の開始時に clear() します。
        """
        self.messages: List[str] = []
        self.logger = logging.getLogger('daily_note_mover.notice')

    def notify(self, message: str) -> None:
        """
        通知を送る（結果は待たない）

        Args:
            message: 通知メッセージ
        """
        self.messages.append(message)
        self.logger.info(message)

    def clear(self) -> None:
        """記録済みの通知を消去"""
        self.messages.clear()
