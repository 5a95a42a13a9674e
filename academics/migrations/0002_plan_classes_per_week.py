from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('academics', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='plan',
            name='classes_per_week',
            field=models.PositiveIntegerField(blank=True, help_text='Nominal classes per week; caps prorated classes with classes_per_period', null=True),
        ),
    ]
