"""Structural email address validation."""


def validate_email_address(email: str) -> str:
    """Return ``email`` unchanged if it is structurally valid, else raise ``ValueError``.

    Enforces exactly one @, non-empty local and domain parts, a dotted domain,
    no consecutive dots and no whitespace or forbidden characters.
    """
    if any(ch in email for ch in (" ", "\t", "\n")):
        raise ValueError(f"Invalid email address: {email!r}")

    if email.count("@") != 1:
        raise ValueError(f"Invalid email address: {email!r}")

    local_part, domain_part = email.split("@", 1)

    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        raise ValueError(f"Invalid email address: {email!r}")

    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        raise ValueError(f"Invalid email address: {email!r}")

    for label in domain_part.split("."):
        if label.startswith("-") or label.endswith("-"):
            raise ValueError(f"Invalid email address: {email!r}")

    if "." not in domain_part:
        raise ValueError(f"Invalid email address: {email!r}")

    if ".." in local_part or ".." in domain_part:
        raise ValueError(f"Invalid email address: {email!r}")

    for forbidden in (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\"):
        if forbidden in email:
            raise ValueError(f"Invalid email address: {email!r}")

    return email
