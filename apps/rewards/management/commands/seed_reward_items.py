from django.core.management.base import BaseCommand
from apps.rewards.models import RewardItem

DEFAULT_ITEMS = [
    ('Coffee Break', 'Take a guilt-free 15 minute coffee break', 30, 'coffee', RewardItem.RewardType.BREAK),
    ('Dark Theme', 'Unlock the dark dashboard theme', 50, 'moon', RewardItem.RewardType.THEME),
    ('Focus Badge', 'Show off your focus streak', 100, 'award', RewardItem.RewardType.BADGE),
    ('Movie Night', 'Treat yourself to a movie', 200, 'film', RewardItem.RewardType.TREAT),
    ('Day Off', 'A full day without tasks', 500, 'sun', RewardItem.RewardType.BREAK),
]


class Command(BaseCommand):
    help = 'Dodaje domyślne nagrody do sklepu (istniejące po nazwie są pomijane)'

    def handle(self, *args, **options):
        created = 0
        for name, description, cost, icon, reward_type in DEFAULT_ITEMS:
            _, was_created = RewardItem.objects.get_or_create(
                name=name,
                defaults={'description': description, 'cost': cost, 'icon': icon, 'type': reward_type},
            )
            if was_created:
                created += 1
                self.stdout.write(f"- {name} ({cost})")

        self.stdout.write(self.style.SUCCESS(f'Dodano {created} nowych nagród.'))
