from __future__ import annotations

import json
import logging
from typing import Any

from google.cloud import pubsub_v1

from .formatting import build_contact_summary, build_estimate_summary, build_quote_summary
from .models.quote import CalculatorQuotePayload, ContactMessage, EstimateSubmission

logger = logging.getLogger(__name__)

ESTIMATE_SUBMITTED_TOPIC = "estimate-submitted"
CALCULATOR_QUOTE_TOPIC = "calculator-quote-submitted"
CONTACT_MESSAGE_TOPIC = "contact-message-submitted"


class PubSubClient:
    """Hands submitted estimates and quotes to the mailer over Pub/Sub."""

    def __init__(
        self,
        project_id: str,
        *,
        estimate_topic: str = ESTIMATE_SUBMITTED_TOPIC,
        quote_topic: str = CALCULATOR_QUOTE_TOPIC,
        contact_topic: str = CONTACT_MESSAGE_TOPIC,
        publisher: pubsub_v1.PublisherClient | None = None,
    ) -> None:
        self.project_id = project_id
        self.estimate_topic = estimate_topic
        self.quote_topic = quote_topic
        self.contact_topic = contact_topic
        self.publisher = publisher or pubsub_v1.PublisherClient()

    def publish(
        self,
        topic_id: str,
        message: dict[str, Any],
        *,
        attributes: dict[str, str] | None = None,
    ) -> str:
        """Publish a message to a Pub/Sub topic.

        Args:
            topic_id: The topic ID (e.g., "estimate-submitted")
            message: The message payload as a dictionary
            attributes: Optional message attributes

        Returns:
            Message ID from Pub/Sub
        """
        topic_path = self.publisher.topic_path(self.project_id, topic_id)
        data = json.dumps(message).encode("utf-8")
        future = self.publisher.publish(topic_path, data, **(attributes or {}))
        message_id = future.result()

        logger.info(
            "Published message to Pub/Sub",
            extra={
                "topic_id": topic_id,
                "message_id": message_id,
                "attributes": attributes,
            },
        )
        return message_id

    def publish_estimate_submitted(self, submission: EstimateSubmission) -> str:
        """Publish a customer estimate request for the owner and customer mails.

        Args:
            submission: Customer inputs, the quoted range and assumptions used

        Returns:
            Message ID from Pub/Sub
        """
        message = {
            "payload": submission.model_dump(mode="json"),
            "summary": build_estimate_summary(submission),
        }
        attributes = {
            "event_type": "estimate_submitted",
            "reply_to": str(submission.user_email),
        }
        return self.publish(self.estimate_topic, message, attributes=attributes)

    def publish_calculator_quote(self, payload: CalculatorQuotePayload) -> str:
        """Publish an internal calculator quote for the owner mail.

        Args:
            payload: Scope, full calculation result and settings used

        Returns:
            Message ID from Pub/Sub
        """
        message = {
            "payload": payload.model_dump(mode="json"),
            "summary": build_quote_summary(payload),
        }
        attributes = {"event_type": "calculator_quote_submitted"}
        if payload.project_name:
            attributes["project_name"] = payload.project_name
        return self.publish(self.quote_topic, message, attributes=attributes)


    def publish_contact_message(self, contact: ContactMessage) -> str:
        """Publish a contact form message for the owner mail.

        Args:
            contact: Sender address and message text

        Returns:
            Message ID from Pub/Sub
        """
        message = {
            "payload": contact.model_dump(mode="json"),
            "summary": build_contact_summary(contact),
        }
        attributes = {
            "event_type": "contact_message_submitted",
            "reply_to": str(contact.sender_email),
        }
        return self.publish(self.contact_topic, message, attributes=attributes)


__all__ = ["PubSubClient", "ESTIMATE_SUBMITTED_TOPIC", "CALCULATOR_QUOTE_TOPIC", "CONTACT_MESSAGE_TOPIC"]
