from django.db import models


class User(models.Model):
    """
    Account that owns projects.

    Maps onto the existing ``users`` table. ``password`` holds a raw bcrypt
    hash ($2b$...), never the plain value.
    """
    email = models.CharField(max_length=30, unique=True)
    password = models.CharField(max_length=255)

    class Meta:
        db_table = 'users'
        ordering = ['id']

    def __str__(self):
        return self.email
