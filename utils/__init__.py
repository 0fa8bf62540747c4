# Shared helpers for the ForMe backend
