"""Employee Directory API - REST facade over an upstream employee directory."""
