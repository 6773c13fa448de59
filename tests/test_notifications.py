"""Tests for notification sinks"""
import logging

from storefront.services import LogNotifier, Notification, NotificationQueue


def test_queue_collects_and_drains():
    queue = NotificationQueue()
    queue.error("first")
    queue.error("second")

    assert queue.pending == (
        Notification(level="error", message="first"),
        Notification(level="error", message="second"),
    )
    assert [n.message for n in queue.drain()] == ["first", "second"]
    assert queue.pending == ()


def test_log_notifier(caplog):
    with caplog.at_level(logging.WARNING, logger="storefront.services.notifications"):
        LogNotifier().error("Erro na remoção do produto")

    assert "Erro na remoção do produto" in caplog.text
