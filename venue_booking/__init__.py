"""
Venue Booking Package
Version: 1.0

IMPORTANT: Keep this file minimal to avoid circular imports.
Import modules directly where needed:
  from venue_booking.eligibility import evaluate, aggregate
  from venue_booking.booking_session import BookingSession
"""
