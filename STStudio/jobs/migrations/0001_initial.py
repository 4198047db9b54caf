import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Job',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('job_id', models.CharField(editable=False, max_length=64, unique=True, verbose_name='รหัสงาน')),
                ('customer_name', models.CharField(blank=True, max_length=200, null=True, verbose_name='ชื่อลูกค้า')),
                ('phone', models.CharField(blank=True, max_length=50, null=True, verbose_name='เบอร์โทร')),
                ('item_type', models.CharField(blank=True, max_length=200, null=True, verbose_name='ประเภทสินค้า')),
                ('quantity', models.PositiveIntegerField(blank=True, null=True, verbose_name='จำนวน')),
                ('status', models.CharField(default='รับงานแล้ว', max_length=100, verbose_name='สถานะ')),
                ('image_url', models.URLField(blank=True, max_length=1000, null=True, verbose_name='รูปงาน')),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, editable=False)),
            ],
            options={
                'verbose_name': 'Job',
                'verbose_name_plural': 'Jobs',
                'ordering': ['-created_at', '-id'],
            },
        ),
    ]
