"""
Order Service

Order submission, pricing, dual-write persistence, notifications and refunds.
"""
