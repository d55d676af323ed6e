"""EmailAddress value object for validated email addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from identity.domain import identity


def normalize_email(email) -> str:
    return (email or "").strip().lower()


@identity.value_object
class EmailAddress:
    """A validated email address: exactly one @, a dotted domain, no spaces."""

    address: String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address

        if any(char.isspace() for char in email) or email.count("@") != 1:
            raise ValidationError({"email": ["Invalid email address"]})

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            raise ValidationError({"email": ["Invalid email address"]})

        if "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
            raise ValidationError({"email": ["Invalid email address"]})

        if ".." in email:
            raise ValidationError({"email": ["Invalid email address"]})

        for label in domain_part.split("."):
            if label.startswith("-") or label.endswith("-"):
                raise ValidationError({"email": ["Invalid email address"]})
