"""Newsletter sign-ups from the footer form."""

from datetime import UTC, datetime

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, String
from protean.utils.globals import current_domain

from storefront.domain import storefront


@storefront.aggregate
class NewsletterSubscriber:
    email = String(required=True, max_length=255)
    subscribed_at = DateTime()


@storefront.command(part_of="NewsletterSubscriber")
class Subscribe:
    email = String(required=True, max_length=255)


@storefront.command_handler(part_of=NewsletterSubscriber)
class NewsletterHandler:
    @handle(Subscribe)
    def subscribe(self, command):
        """Subscribe an address; subscribing twice keeps the first sign-up."""
        email = command.email.strip().lower()
        if "@" not in email or email.startswith("@") or email.endswith("@"):
            raise ValidationError({"email": ["Enter a valid email address"]})

        repo = current_domain.repository_for(NewsletterSubscriber)
        existing = repo._dao.query.filter(email=email).all().items
        if existing:
            return str(existing[0].id)

        subscriber = NewsletterSubscriber(email=email, subscribed_at=datetime.now(UTC))
        repo.add(subscriber)
        return str(subscriber.id)
