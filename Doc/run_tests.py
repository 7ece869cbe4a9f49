#!/usr/bin/env python
"""
Test runner script for comprehensive test execution and coverage
Usage: python Doc/run_tests.py (from the repository root)
"""
import os
import sys
import django
from django.conf import settings
from django.test.utils import get_runner

if __name__ == "__main__":
    sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'hoh.config.settings')
    django.setup()
    TestRunner = get_runner(settings)
    test_runner = TestRunner()
    failures = test_runner.run_tests([
        'hoh.core',
        'hoh.showcase',
        'hoh.leads',
        'hoh.estimates',
        'hoh.staff',
        'hoh.projects',
        'hoh.payments',
        'hoh.renovations',
        'hoh.dashboard',
    ])
    sys.exit(bool(failures))
