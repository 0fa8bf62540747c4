"""
Email Infrastructure Tests
===========================
"""

from unittest.mock import patch

from django.core import mail
from django.test import SimpleTestCase, override_settings

from infrastructure.email import (
    EmailException,
    EmailFactory,
    EmailMessage,
    EmailServiceInterface,
    MockEmailService,
    SMTPEmailService,
)


class EmailInterfaceTest(SimpleTestCase):
    def test_interface_is_abstract(self):
        with self.assertRaises(TypeError):
            EmailServiceInterface()


class MockEmailServiceTest(SimpleTestCase):
    def setUp(self):
        self.email_service = MockEmailService()

    def test_send_records_message(self):
        message = EmailMessage(subject="Welcome", body="Thanks for joining", to=["ana@example.com"])

        self.assertTrue(self.email_service.send(message))
        self.assertEqual(self.email_service.get_sent_count(), 1)
        self.assertEqual(self.email_service.get_last_message(), message)

    def test_send_bulk_counts_every_message(self):
        messages = [EmailMessage(subject=f"Hi {i}", body="b", to=[f"u{i}@example.com"]) for i in range(3)]

        self.assertEqual(self.email_service.send_bulk(messages), 3)
        self.assertEqual(self.email_service.get_sent_count(), 3)

    def test_clear_sent_messages(self):
        self.email_service.send(EmailMessage(subject="s", body="b", to=["a@example.com"]))
        self.email_service.clear_sent_messages()

        self.assertEqual(self.email_service.get_sent_count(), 0)
        self.assertIsNone(self.email_service.get_last_message())


@override_settings(EMAIL_BACKEND="django.core.mail.backends.locmem.EmailBackend")
class SMTPEmailServiceTest(SimpleTestCase):
    def setUp(self):
        self.email_service = SMTPEmailService()

    def test_send_plain_and_html(self):
        message = EmailMessage(
            subject="Demo request received",
            body="We'll be in touch",
            to=["ana@example.com"],
            html_body="<p>We'll be in touch</p>",
        )

        self.assertTrue(self.email_service.send(message))
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].subject, "Demo request received")
        self.assertEqual(mail.outbox[0].alternatives[0][1], "text/html")

    def test_send_bulk(self):
        messages = [EmailMessage(subject="s", body="b", to=[f"u{i}@example.com"]) for i in range(2)]

        self.assertEqual(self.email_service.send_bulk(messages), 2)
        self.assertEqual(len(mail.outbox), 2)

    @patch("infrastructure.email.smtp_service.EmailMultiAlternatives.send")
    def test_send_failure_raises_email_exception(self, mock_send):
        mock_send.side_effect = OSError("connection refused")

        with self.assertRaises(EmailException):
            self.email_service.send(EmailMessage(subject="s", body="b", to=["a@example.com"]))


class EmailFactoryTest(SimpleTestCase):
    def test_create_mock(self):
        self.assertIsInstance(EmailFactory.create("mock"), MockEmailService)

    def test_create_smtp(self):
        self.assertIsInstance(EmailFactory.create("smtp"), SMTPEmailService)

    @override_settings(EMAIL_SERVICE_BACKEND="mock")
    def test_create_from_settings(self):
        self.assertIsInstance(EmailFactory.create(), MockEmailService)

    def test_invalid_backend(self):
        with self.assertRaises(ValueError):
            EmailFactory.create("carrier-pigeon")
