"""Local mock of the sign-in API"""
