"""Campus marketplace backend: OTP-verified sell and lease listings."""
