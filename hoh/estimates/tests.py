"""
Comprehensive test suite for Estimates module
Tests: Pricing calculators, public estimate endpoints and the multi-step calculator wizards
"""
from django.test import TestCase
from rest_framework import status
from decimal import Decimal
from hoh.core.test_utils import AuthenticatedAPIClient
from hoh.estimates.calculators import (
    EstimateError, package_estimate, city_estimate, interior_estimate, construction_estimate,
    check_space_limit, space_limit_message, built_up_area, round_whole,
)
from hoh.estimates.wizards import InteriorWizard, ConstructionWizard, WizardError
from hoh.leads.models import Lead


INTERIOR_CONTACT = {
    'full_name': 'Neha Sharma',
    'phone': '9876543210',
    'email': 'neha@example.com',
    'city': 'Pune',
    'budget_range': '5-10 Lakhs',
    'start_timeline': 'Within 3 months',
}

CONSTRUCTION_CONTACT = {
    'full_name': 'Vikram Singh',
    'phone': '+91 98765 43210',
    'email': 'vikram@example.com',
    'city': 'Jaipur',
}


class CalculatorTests(TestCase):
    """Test the pure pricing functions"""

    def test_package_estimate(self):
        estimate = package_estimate('2BHK', 'Premium')
        self.assertEqual(estimate['price'], Decimal('486541'))
        self.assertEqual(estimate['description'], 'Luxury design with high-end materials')

    def test_package_not_offered_for_bhk(self):
        with self.assertRaises(EstimateError) as ctx:
            package_estimate('4BHK', 'Standard')
        self.assertEqual(ctx.exception.message, 'Standard package is not available for 4BHK')

    def test_city_estimate_known_city(self):
        estimate = city_estimate('1000', 'Mumbai')
        self.assertEqual(estimate['estimated_cost'], 2250000)
        self.assertEqual(estimate['city_multiplier'], Decimal('1.5'))

    def test_city_estimate_is_case_insensitive_with_default(self):
        self.assertEqual(city_estimate(1000, '  PUNE ')['estimated_cost'], 2025000)
        self.assertEqual(city_estimate(1000, 'Nagpur')['estimated_cost'], 1500000)

    def test_city_estimate_requires_inputs(self):
        with self.assertRaises(EstimateError) as ctx:
            city_estimate('', 'Mumbai')
        self.assertEqual(ctx.exception.message, 'Carpet area and city are required')

    def test_city_estimate_rejects_non_positive_area(self):
        for value in ('0', '-5', 'abc'):
            with self.assertRaises(EstimateError) as ctx:
                city_estimate(value, 'Mumbai')
            self.assertEqual(ctx.exception.message, 'Carpet area must be a positive number')

    def test_interior_full_home(self):
        estimate = interior_estimate('2BHK', 'small', 'premium')
        self.assertEqual(estimate['carpet_area'], 850)
        self.assertEqual(estimate['total_cost'], 1700000)
        self.assertEqual(estimate['min_cost'], 1530000)
        self.assertEqual(estimate['max_cost'], 1870000)

    def test_interior_specific_spaces(self):
        estimate = interior_estimate(
            '2BHK', 'large', 'luxury', work_type='specific',
            selected_spaces=['bedroom', 'bedroom', 'kitchen'],
        )
        self.assertEqual(estimate['total_sq_ft'], 572)
        self.assertEqual(estimate['total_cost'], 1344200)
        self.assertEqual(estimate['min_cost'], 1209780)
        self.assertEqual(estimate['max_cost'], 1478620)

    def test_interior_custom_size(self):
        estimate = interior_estimate('3BHK', 'custom', 'affordable', custom_carpet_area='1450')
        self.assertEqual(estimate['total_cost'], 2465000)

    def test_interior_custom_size_requires_area(self):
        with self.assertRaises(EstimateError):
            interior_estimate('3BHK', 'custom', 'affordable')

    def test_interior_room_limit(self):
        with self.assertRaises(EstimateError) as ctx:
            interior_estimate('2BHK', 'small', 'premium', work_type='specific',
                              selected_spaces=['bedroom', 'bedroom', 'bedroom'])
        self.assertEqual(ctx.exception.message, 'Maximum 2 bedrooms allowed for 2BHK')

    def test_space_limits(self):
        self.assertTrue(check_space_limit('2BHK', ['bedroom'], 'bedroom'))
        self.assertFalse(check_space_limit('2BHK', ['bedroom', 'bedroom'], 'bedroom'))
        self.assertTrue(check_space_limit('1BHK', ['foyer', 'foyer'], 'foyer'))
        self.assertEqual(space_limit_message('2BHK', 'kitchen'), 'Maximum 1 kitchen allowed for 2BHK')
        self.assertEqual(space_limit_message('4BHK', 'livingRoom'), 'Maximum 2 living rooms allowed for 4BHK')

    def test_construction_estimate(self):
        estimate = construction_estimate('residential', '1000', 'G+1', 'premium')
        self.assertEqual(estimate['built_up_area'], 1800)
        self.assertEqual(estimate['min_cost'], 3330000)
        self.assertEqual(estimate['max_cost'], 3870000)
        self.assertEqual(estimate['min_cost_lakhs'], Decimal('33.3'))
        self.assertEqual(estimate['max_cost_lakhs'], Decimal('38.7'))
        self.assertEqual(estimate['average_cost'], 3600000)
        self.assertEqual(estimate['floor_label'], {'main': '2 Floors', 'sub': 'Ground + 1'})

    def test_plot_area_bounds(self):
        self.assertEqual(built_up_area(400, 'G'), 400)
        self.assertEqual(built_up_area(20000, 'G+4'), 84000)
        for value in (399, 20001, 'x'):
            with self.assertRaises(EstimateError) as ctx:
                built_up_area(value, 'G')
            self.assertEqual(ctx.exception.message, 'Plot area must be between 400 and 20000 sq.ft')

    def test_round_half_up(self):
        self.assertEqual(round_whole(Decimal('2.5')), 3)
        self.assertEqual(round_whole(Decimal('2.49')), 2)


class EstimateAPITests(TestCase):
    """Test the public estimate endpoints"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()

    def test_city_estimate(self):
        response = self.client.post('/api/estimate/', {'carpet_area': 1200, 'city': 'Chennai'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['estimated_cost'], 2340000)

    def test_city_estimate_missing_city(self):
        response = self.client.post('/api/estimate/', {'carpet_area': 1200}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'Carpet area and city are required'})

    def test_options(self):
        response = self.client.get('/api/estimates/options/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('2BHK', response.data['packages'])
        self.assertIn('G+2', response.data['construction']['floors'])

    def test_package_estimate_creates_lead(self):
        response = self.client.post('/api/estimates/package/', {
            'bhk': '3BHK', 'package': 'Luxury', 'name': 'Kiran',
            'email': 'Kiran@Example.com', 'phone': '98765-43210',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        lead = Lead.objects.get(pk=response.data['lead_id'])
        self.assertEqual(lead.lead_type, 'cost_estimate')
        self.assertEqual(lead.source, 'Cost Estimate Form')
        self.assertEqual(lead.email, 'kiran@example.com')
        self.assertEqual(lead.estimated_cost, Decimal('564531'))
        self.assertEqual(lead.history.count(), 1)

    def test_package_estimate_validation_messages(self):
        response = self.client.post('/api/estimates/package/', {
            'bhk': '2BHK', 'package': 'Basic', 'name': 'Kiran',
            'email': 'bad-email', 'phone': '12345',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data['email'][0]), 'Invalid email format')
        self.assertEqual(str(response.data['phone'][0]), 'Please enter a valid 10-digit phone number')
        self.assertEqual(Lead.objects.count(), 0)

    def test_package_estimate_unavailable_package(self):
        response = self.client.post('/api/estimates/package/', {
            'bhk': '4BHK', 'package': 'Standard', 'name': 'Kiran',
            'email': 'k@example.com', 'phone': '9876543210',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('package', response.data)

    def test_interior_estimate(self):
        response = self.client.post('/api/estimates/interior/', {
            'bhk': '2BHK', 'size': 'small', 'category': 'premium',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_cost'], 1700000)
        self.assertEqual(Lead.objects.count(), 0)

    def test_construction_estimate_bad_category(self):
        response = self.client.post('/api/estimates/construction/', {
            'project_type': 'commercial', 'plot_area': 1000, 'floors': 'G', 'category': 'superLuxury',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'Please select a construction category'})


class InteriorWizardTests(TestCase):
    """Test the interior calculator step machine"""

    def test_full_home_skips_spaces_step(self):
        wizard = InteriorWizard({'work_type': 'full', 'bhk': '2BHK', 'size': 'small'})
        result = wizard.handle(3, 'next')
        self.assertEqual(result['step'], 5)
        self.assertEqual(result['total_steps'], 6)

    def test_specific_work_visits_spaces_step(self):
        wizard = InteriorWizard({'work_type': 'specific', 'bhk': '2BHK', 'size': 'small'})
        result = wizard.handle(3, 'next')
        self.assertEqual(result['step'], 4)
        self.assertEqual(result['total_steps'], 7)

    def test_back(self):
        wizard = InteriorWizard({'work_type': 'full'})
        self.assertEqual(wizard.handle(5, 'back')['step'], 3)
        self.assertEqual(wizard.handle(1, 'back')['step'], 1)

    def test_next_revalidates_earlier_steps(self):
        wizard = InteriorWizard({'work_type': 'full', 'bhk': '9BHK', 'size': 'small', 'category': 'premium'})
        result = wizard.handle(5, 'next')
        self.assertEqual(result['step'], 2)
        self.assertEqual(result['errors'], {'bhk': 'Please select BHK configuration'})

    def test_step_not_on_path(self):
        wizard = InteriorWizard({'work_type': 'full'})
        with self.assertRaises(WizardError):
            wizard.handle(4, 'next')

    def test_toggle_space_respects_limit(self):
        wizard = InteriorWizard({'work_type': 'specific', 'bhk': '2BHK', 'selected_spaces': ['bedroom', 'bedroom']})
        result = wizard.handle(4, 'toggle_space', space='bedroom')
        self.assertEqual(result['errors'], {'selected_spaces': 'Maximum 2 bedrooms allowed for 2BHK'})
        result = wizard.handle(4, 'toggle_space', space='kitchen')
        self.assertEqual(result['data']['selected_spaces'], ['bedroom', 'bedroom', 'kitchen'])
        result = wizard.handle(4, 'toggle_space', space='bedroom', remove=True)
        self.assertEqual(result['data']['selected_spaces'], ['bedroom', 'kitchen'])

    def test_reset(self):
        wizard = InteriorWizard({'work_type': 'specific', 'bhk': '2BHK'})
        result = wizard.handle(3, 'reset')
        self.assertEqual(result['step'], 1)
        self.assertEqual(result['data']['bhk'], '')
        self.assertEqual(result['data']['work_type'], 'full')


class WizardAPITests(TestCase):
    """Test the calculator wizard endpoints"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()

    def test_interior_wizard_completion(self):
        data = {'work_type': 'full', 'bhk': '3BHK', 'size': 'large', 'category': 'luxury', **INTERIOR_CONTACT}
        response = self.client.post('/api/estimates/interior/wizard/', {
            'step': 6, 'action': 'next', 'data': data,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['completed'])
        self.assertEqual(response.data['step_name'], 'results')
        self.assertEqual(response.data['estimate']['total_cost'], 3760000)

        lead = Lead.objects.get(pk=response.data['lead_id'])
        self.assertEqual(lead.source, 'Interior Cost Calculator')
        self.assertEqual(lead.service_type, 'interior')
        self.assertEqual(lead.carpet_area, Decimal('1600'))
        self.assertEqual(lead.budget_range, '5-10 Lakhs')

    def test_interior_wizard_contact_errors(self):
        data = {'work_type': 'full', 'bhk': '3BHK', 'size': 'large', 'category': 'luxury',
                **INTERIOR_CONTACT, 'email': 'nope', 'city': ''}
        response = self.client.post('/api/estimates/interior/wizard/', {
            'step': 6, 'action': 'next', 'data': data,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['step'], 6)
        self.assertEqual(response.data['errors']['email'], 'Please enter a valid email address')
        self.assertEqual(response.data['errors']['city'], 'City is required')
        self.assertEqual(Lead.objects.count(), 0)

    def test_results_step_rejects_actions(self):
        response = self.client.post('/api/estimates/interior/wizard/', {
            'step': 7, 'action': 'next', 'data': {},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)

    def test_unknown_action(self):
        response = self.client.post('/api/estimates/interior/wizard/', {
            'step': 1, 'action': 'jump',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('action', response.data)

    def test_construction_wizard_completion(self):
        data = {'project_type': 'residential', 'plot_area': '1200', 'floors': 'G+2',
                'category': 'luxury', **CONSTRUCTION_CONTACT}
        response = self.client.post('/api/estimates/construction/wizard/', {
            'step': 5, 'action': 'next', 'data': data,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['estimate']['built_up_area'], 3120)

        lead = Lead.objects.get(pk=response.data['lead_id'])
        self.assertEqual(lead.service_type, 'construction')
        self.assertEqual(lead.budget_range, 'Not specified')
        self.assertIn('Floors: G+2', lead.notes)
        self.assertEqual(lead.estimated_cost, Decimal('7644000'))

    def test_construction_wizard_plot_area_error(self):
        response = self.client.post('/api/estimates/construction/wizard/', {
            'step': 2, 'action': 'next', 'data': {'project_type': 'commercial', 'plot_area': '100'},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['errors']['plot_area'], 'Plot area must be between 400 and 20000 sq.ft')

    def test_construction_wizard_list_answer_is_a_field_error(self):
        response = self.client.post('/api/estimates/construction/wizard/', {
            'step': 3, 'action': 'next',
            'data': {'project_type': 'residential', 'plot_area': '1200', 'floors': ['G']},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['errors']['floors'], 'Please select the number of floors')

    def test_interior_wizard_object_answer_is_a_field_error(self):
        response = self.client.post('/api/estimates/interior/wizard/', {
            'step': 2, 'action': 'next', 'data': {'work_type': 'full', 'bhk': {'value': '3BHK'}},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['errors']['bhk'], 'Please select BHK configuration')

    def test_construction_wizard_advances(self):
        response = self.client.post('/api/estimates/construction/wizard/', {
            'step': 1, 'action': 'next', 'data': {'project_type': 'commercial'},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['step'], 2)
        self.assertEqual(response.data['step_name'], 'plot_area')

    def test_construction_wizard_direct_class(self):
        wizard = ConstructionWizard({'project_type': 'residential', 'plot_area': 1000, 'floors': 'G'})
        self.assertEqual(wizard.handle(3, 'next')['step'], 4)
