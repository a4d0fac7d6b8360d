from django.db import models


class Project(models.Model):
    """
    A named group of tasks owned by one user.
    """
    name = models.CharField(max_length=30)
    topic = models.CharField(max_length=20, null=True, blank=True)
    # Store owner as plain id (no FK to keep identity app independent)
    userid = models.BigIntegerField(db_index=True, db_column='userid')

    class Meta:
        db_table = 'projects'
        ordering = ['id']

    def __str__(self):
        return self.name


class Task(models.Model):
    name = models.CharField(max_length=255)
    deadline = models.DateField(null=True, blank=True)
    iscompleted = models.BooleanField(default=False)
    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='tasks',
        db_column='projectid',
    )

    class Meta:
        db_table = 'tasks'
        ordering = ['id']

    def __str__(self):
        return f"{self.name} ({'done' if self.iscompleted else 'open'})"
