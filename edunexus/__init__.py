"""EduNexus course schedule client."""
