"""Guard attendance package.

Organized by feature modules (leave, vacations, users) with a pure leave
accrual core and thin service/repository layers around it.
"""
