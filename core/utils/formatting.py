"""Formatting utilities for display and privacy-safe logging."""


def mask_email(email: str) -> str:
    """
    Mask email address for privacy.
    
    Args:
        email: Email address to mask
        
    Returns:
        Masked email (e.g., "j***@example.com")
    """
    if '@' not in email:
        return email
    
    local, domain = email.split('@', 1)
    
    if len(local) <= 2:
        masked_local = local[0] + '*'
    else:
        masked_local = local[0] + '*' * (len(local) - 2) + local[-1]
    
    return f"{masked_local}@{domain}"


def mask_recipients(recipients: str | list[str]) -> str:
    """
    Mask one or many recipient addresses for log output.

    Args:
        recipients: A single address or a list of addresses

    Returns:
        Comma-separated masked addresses
    """
    if isinstance(recipients, str):
        recipients = [recipients]
    return ", ".join(mask_email(r) for r in recipients)


def format_percentage(numerator: int, denominator: int, decimals: int = 2) -> str:
    """
    Format a ratio as a percentage string without the percent sign.

    Args:
        numerator: Part count
        denominator: Whole count (must be non-zero)
        decimals: Number of decimal places

    Returns:
        Percentage string, e.g. "50.00"
    """
    return f"{numerator / denominator * 100:.{decimals}f}"
