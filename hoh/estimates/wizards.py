"""
Step machines behind the multi-step cost calculators.

The server keeps no wizard state between requests: the client sends the
step it is on, the action it wants (``next``, ``back``, ``reset`` or a
wizard-specific action) and every answer collected so far. The wizard
validates the answers on the path up to that step and tells the client
where to go next. Completing the contact step saves the lead and returns
the estimate.
"""
from hoh.core.validators import is_valid_email, is_valid_phone
from .calculators import (
    EstimateError, interior_estimate, construction_estimate, check_space_limit,
    space_limit_message, validate_spaces, validate_plot_area, to_decimal,
)
from .pricing import (
    WORK_TYPES, INTERIOR_BHK_OPTIONS, SIZE_OPTIONS, CUSTOM_SIZE, INTERIOR_RATES,
    SPACE_ALLOCATION, PROJECT_TYPES, FLOOR_MULTIPLIERS, CONSTRUCTION_RATES,
)
from .utils import save_estimate_lead


class WizardError(EstimateError):
    pass


class BaseWizard:
    name = ''
    steps = {}
    fields = ()
    list_fields = ()
    # (field, label) pairs required on the contact step
    contact_fields = ()

    def __init__(self, data=None):
        self.data = self.clean_data(data or {})

    @property
    def final_step(self):
        return max(self.steps)

    @property
    def contact_step(self):
        return self.final_step - 1

    def clean_data(self, data):
        cleaned = {}
        for field in self.fields:
            value = data.get(field)
            if field in self.list_fields:
                cleaned[field] = [str(item) for item in value] if isinstance(value, (list, tuple)) else []
            elif value is None:
                cleaned[field] = ''
            elif isinstance(value, str):
                cleaned[field] = value.strip()
            elif isinstance(value, (int, float)) and not isinstance(value, bool):
                cleaned[field] = value
            else:
                # Nested lists or objects never match a choice
                cleaned[field] = ''
        return cleaned

    def path(self):
        """Steps visited, in order, for the current answers"""
        return sorted(self.steps)

    def validate_step(self, step):
        validator = getattr(self, f'validate_step_{step}', None)
        return validator() if validator else {}

    def validate_contact(self):
        errors = {}
        for field, label in self.contact_fields:
            if not self.data.get(field):
                errors[field] = f'{label} is required'
        email = self.data.get('email')
        if email and not is_valid_email(email):
            errors['email'] = 'Please enter a valid email address'
        phone = self.data.get('phone')
        if phone and not is_valid_phone(phone):
            errors['phone'] = 'Please enter a valid phone number'
        return errors

    def estimate(self):
        raise NotImplementedError

    def submit(self, estimate):
        raise NotImplementedError

    def result(self, step, errors=None, estimate=None, lead=None):
        return {
            'wizard': self.name,
            'step': step,
            'step_name': self.steps[step],
            'total_steps': len(self.path()),
            'data': self.data,
            'errors': errors or {},
            'estimate': estimate,
            'lead_id': lead.id if lead else None,
            'completed': step == self.final_step,
        }

    def handle(self, step, action, **options):
        """Apply ``action`` at ``step`` and return the resulting wizard state"""
        if action == 'reset':
            self.data = self.clean_data({})
            return self.result(min(self.steps))

        path = self.path()
        if step not in path:
            raise WizardError(f'Step {step} is not part of this calculator flow')
        if step == self.final_step:
            raise WizardError('This estimate has already been submitted. Reset to start a new one.')

        if action == 'next':
            return self.next(step, path)
        if action == 'back':
            index = path.index(step)
            return self.result(path[index - 1] if index > 0 else path[0])
        return self.handle_action(step, action, **options)

    def handle_action(self, step, action, **options):
        raise WizardError(f'Unknown action: {action}')

    def next(self, step, path):
        # Earlier answers are re-checked because nothing is stored between calls
        for earlier in path[:path.index(step) + 1]:
            errors = self.validate_step(earlier)
            if errors:
                return self.result(earlier, errors=errors)

        next_step = path[path.index(step) + 1]
        if next_step == self.final_step:
            estimate = self.estimate()
            lead = self.submit(estimate)
            return self.result(next_step, estimate=estimate, lead=lead)
        return self.result(next_step)


class InteriorWizard(BaseWizard):
    """work type -> BHK -> size -> (spaces) -> category -> contact -> results"""
    name = 'interior'
    steps = {
        1: 'work_type',
        2: 'bhk',
        3: 'size',
        4: 'spaces',
        5: 'category',
        6: 'contact',
        7: 'results',
    }
    fields = (
        'work_type', 'bhk', 'size', 'custom_carpet_area', 'selected_spaces', 'category',
        'full_name', 'phone', 'email', 'city', 'budget_range', 'start_timeline',
    )
    list_fields = ('selected_spaces',)
    contact_fields = (
        ('full_name', 'Full name'),
        ('phone', 'Phone number'),
        ('email', 'Email'),
        ('city', 'City'),
        ('budget_range', 'Budget range'),
        ('start_timeline', 'Start timeline'),
    )

    def clean_data(self, data):
        cleaned = super().clean_data(data)
        if not cleaned['work_type']:
            cleaned['work_type'] = 'full'
        return cleaned

    def path(self):
        if self.data.get('work_type') == 'specific':
            return sorted(self.steps)
        return [step for step in sorted(self.steps) if step != 4]

    def validate_step_1(self):
        if self.data['work_type'] not in WORK_TYPES:
            return {'work_type': 'Please select the type of work'}
        return {}

    def validate_step_2(self):
        if self.data['bhk'] not in INTERIOR_BHK_OPTIONS:
            return {'bhk': 'Please select BHK configuration'}
        return {}

    def validate_step_3(self):
        size = self.data['size']
        if size not in SIZE_OPTIONS:
            return {'size': 'Please select your home size'}
        if size == CUSTOM_SIZE:
            area = to_decimal(self.data['custom_carpet_area'])
            if area is None or area <= 0:
                return {'custom_carpet_area': 'Please enter a valid carpet area'}
        return {}

    def validate_step_4(self):
        spaces = self.data['selected_spaces']
        if not spaces:
            return {'selected_spaces': 'Please select at least one space'}
        try:
            validate_spaces(self.data['bhk'], spaces)
        except EstimateError as e:
            return {'selected_spaces': e.message}
        return {}

    def validate_step_5(self):
        if self.data['category'] not in INTERIOR_RATES:
            return {'category': 'Please select a design category'}
        return {}

    def validate_step_6(self):
        return self.validate_contact()

    def handle_action(self, step, action, **options):
        if action != 'toggle_space':
            return super().handle_action(step, action, **options)
        if step != 4:
            raise WizardError('Spaces can only be changed on the spaces step')

        space = options.get('space')
        if space not in SPACE_ALLOCATION:
            return self.result(step, errors={'selected_spaces': f'Unknown space: {space}'})

        spaces = self.data['selected_spaces']
        if options.get('remove'):
            if space in spaces:
                spaces.remove(space)
            return self.result(step)

        if not check_space_limit(self.data['bhk'], spaces, space):
            return self.result(step, errors={'selected_spaces': space_limit_message(self.data['bhk'], space)})
        spaces.append(space)
        return self.result(step)

    def estimate(self):
        return interior_estimate(
            bhk=self.data['bhk'],
            size=self.data['size'],
            category=self.data['category'],
            work_type=self.data['work_type'],
            selected_spaces=self.data['selected_spaces'] if self.data['work_type'] == 'specific' else [],
            custom_carpet_area=self.data['custom_carpet_area'],
        )

    def submit(self, estimate):
        return save_estimate_lead(
            name=self.data['full_name'],
            email=self.data['email'],
            phone=self.data['phone'],
            city=self.data['city'],
            bhk=self.data['bhk'],
            carpet_area=estimate['carpet_area'],
            package=self.data['category'],
            estimated_cost=estimate['total_cost'],
            budget_range=self.data['budget_range'],
            start_timeline=self.data['start_timeline'],
            work_type=self.data['work_type'],
            selected_spaces=estimate['selected_spaces'],
            source='Interior Cost Calculator',
            service_type='interior',
        )


class ConstructionWizard(BaseWizard):
    """project type -> plot area -> floors -> category -> contact -> results"""
    name = 'construction'
    steps = {
        1: 'project_type',
        2: 'plot_area',
        3: 'floors',
        4: 'category',
        5: 'contact',
        6: 'results',
    }
    fields = (
        'project_type', 'plot_area', 'floors', 'category',
        'full_name', 'phone', 'email', 'city', 'budget',
    )
    contact_fields = (
        ('full_name', 'Full name'),
        ('phone', 'Phone number'),
        ('email', 'Email'),
        ('city', 'City'),
    )

    def validate_step_1(self):
        if self.data['project_type'] not in PROJECT_TYPES:
            return {'project_type': 'Please select a project type'}
        return {}

    def validate_step_2(self):
        try:
            validate_plot_area(self.data['plot_area'])
        except EstimateError as e:
            return {'plot_area': e.message}
        return {}

    def validate_step_3(self):
        if self.data['floors'] not in FLOOR_MULTIPLIERS:
            return {'floors': 'Please select the number of floors'}
        return {}

    def validate_step_4(self):
        if self.data['category'] not in CONSTRUCTION_RATES[self.data['project_type']]:
            return {'category': 'Please select a construction category'}
        return {}

    def validate_step_5(self):
        return self.validate_contact()

    def estimate(self):
        return construction_estimate(
            project_type=self.data['project_type'],
            plot_area=self.data['plot_area'],
            floors=self.data['floors'],
            category=self.data['category'],
        )

    def submit(self, estimate):
        budget = self.data['budget'] or 'Not specified'
        notes = (
            f"Project: {self.data['project_type']}, Plot: {estimate['plot_area']} sq.ft, "
            f"Floors: {self.data['floors']}, Built-up: {estimate['built_up_area']} sq.ft, "
            f"Category: {self.data['category']}, Budget: {budget}"
        )
        return save_estimate_lead(
            name=self.data['full_name'],
            email=self.data['email'],
            phone=self.data['phone'],
            city=self.data['city'],
            carpet_area=estimate['built_up_area'],
            package=self.data['category'],
            estimated_cost=estimate['average_cost'],
            budget_range=budget,
            project_type=self.data['project_type'],
            plot_area=to_decimal(self.data['plot_area']),
            floors=self.data['floors'],
            notes=notes,
            source='Construction Cost Calculator',
            service_type='construction',
        )


