"""
ClaimsDesk - HR reimbursement claims backend
"""
